# mosaic/__init__.py
