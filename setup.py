#!/usr/bin/python3

from setuptools import setup, find_packages
from glob import glob

setup(
    name         = "collection-graphs",
    version      = "0.1.0",
    description  = "Graph templates matching for collectd data files",
    scripts      = glob("bin/*"),
    packages     = find_packages("lib"),
    package_dir  = { "": "lib" },
    python_requires  = ">=3.6",
    install_requires = ["PyYAML"],
    extras_require   = { "test": ["pytest"] },
)
