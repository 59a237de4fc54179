# setup.py
from setuptools import setup, find_packages

setup(
	name="mosaic",
	version="0.1.0",
	packages=find_packages(exclude=["tests", "tests.*"]),
	install_requires=[
		"numpy", "opencv-python", "pygame", "PyYAML"
	],
	extras_require={
		"test": ["pytest"],
	},
	entry_points={
		"console_scripts": [
			"mosaic=mosaic.core:main",  # command → module:function
		],
	},
)
