"""Setup configuration for shim-normalize."""

from setuptools import setup, find_packages

setup(
    name="shim-normalize",
    version="0.1.0",
    description="Normalization of health and fitness API responses into a canonical measurement schema",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    license="MIT",
)
