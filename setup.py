#!/usr/bin/env python3
"""
Setup script for fpdfwriter
"""

from setuptools import setup, find_packages
import os

# Read requirements from requirements.txt
def read_requirements():
    with open('requirements.txt', 'r') as f:
        return [line.strip() for line in f if line.strip() and not line.startswith('#')]

# Read long description from README
def read_long_description():
    if os.path.exists('README.md'):
        with open('README.md', 'r', encoding='utf-8') as f:
            return f.read()
    return "A convenience layer over the fpdf2 PDF engine with validated table layout"

setup(
    name="fpdfwriter",
    version="1.0.0",
    description="A convenience layer over the fpdf2 PDF engine with validated table layout",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["src", "generators", "generators.*"]),
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "fpdfwriter=src.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Printing",
        "Topic :: Utilities",
    ],
    keywords="pdf fpdf table-layout cli python",
    include_package_data=True,
    package_data={
        "": ["*.yaml", "*.yml"],
    },
)
