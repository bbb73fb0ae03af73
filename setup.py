#!/usr/bin/env python3
"""
Setup script for pypfamsum
"""

from setuptools import setup, find_packages

setup(
    name="pypfamsum",
    version="0.1.0",
    description="Pfam domain annotation and summarization of cancer mutation data",
    author="pfamsum Team",
    author_email="example@example.org",
    packages=find_packages(include=["pfamsum", "pfamsum.*"]),
    install_requires=[
        "pyyaml>=6.0",
        "numpy>=1.22.0",
        "pandas>=1.5.0",
        "matplotlib>=3.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'pfamsum=pfamsum.cli.main:main',
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
)
