# setup.py
from setuptools import setup, find_packages

setup(
    name="config_dump",
    version="0.1.0",
    description="Deterministic export of config collections and job database tables",
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "dist",
            "build",
        )
    ),
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "postgres": ["psycopg2-binary>=2.9"],
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "config-dump=config_dump.cli:main",
        ],
    },
    python_requires=">=3.10",
)
