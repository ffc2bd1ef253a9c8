"""Setup script for portafs."""

from pathlib import Path

from setuptools import setup, find_packages

here = Path(__file__).parent

with open(here / "requirements.txt") as f:
    requirements = f.read().splitlines()
    # Filter out comments and empty lines
    requirements = [
        line.strip() for line in requirements
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="portafs",
    version="0.1.0",
    description="Portable path composition, directory traversal and encoding-aware file I/O",
    author="portafs Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
