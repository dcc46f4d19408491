"""
NameOrigin Setup Script
=======================
Installs nameorigin as a local editable package so that all internal
imports (e.g. `from nameorigin.model.cell import step`) work from any
script, test or notebook.

Usage:
    cd /path/to/nameorigin
    pip install -e .
"""

from setuptools import setup, find_packages

setup(
    name="nameorigin",
    version="0.1.0",
    description=(
        "NameOrigin: surname nationality classification with a hand-written "
        "character-level recurrent network"
    ),
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["nameorigin", "nameorigin.*"]),
    python_requires=">=3.10",
    install_requires=[
        "torch>=2.1.0",
        "numpy>=1.24.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
)
