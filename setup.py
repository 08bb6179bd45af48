"""
setup.py

Packaging metadata and CLI entry point for mediaflow.

Version: 0.3.0 - Validates media pipeline documents (JSON or YAML) against
the registered step schemas, with layered YAML configuration and a
`mediaflow` click CLI.
"""
from setuptools import setup, find_packages

setup(
    name="mediaflow",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click",
        "pydantic>=2.5",
        "PyYAML",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "mediaflow=cli:cli",
        ],
    },
    python_requires=">=3.9",
)
