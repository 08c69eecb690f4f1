"""Setup script for streamvariant."""

from setuptools import setup, find_packages

setup(
    name="streamvariant",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0",
        "loguru>=0.7.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "streamvariant=streamvariant.cli:main",
        ],
    },
)
