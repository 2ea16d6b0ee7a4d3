from setuptools import setup, find_packages

setup(
    name="gibman",
    version="0.1.0",
    description="WAD manager and launcher for DOOM source ports",
    author="Maxwell Jensen",
    license="EUPL-1.2",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "platformdirs",  # per-user config directory
        "rich",  # colored console diagnostics
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "isort",
            "mypy",
        ]
    },
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "gibman=gibman.main:main",
        ]
    },
)
