"""
Setup script for logproof-fixtures.

To install:
    pip install .

To install in development mode:
    pip install -e ".[dev]"
"""

import os

from setuptools import setup, find_packages

setup(
    name="logproof-fixtures",
    version="0.1.0",
    author="",
    author_email="",
    description="Lattice problem instances A*S = T from FHE backend buffers",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["logproof_fixtures", "logproof_fixtures.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "PyYAML>=5.4",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    keywords="lattice zero-knowledge bfv rns multiprecision",
)
