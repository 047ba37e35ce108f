#!/usr/bin/env python3
"""
Setup configuration for ytmusic-shell
Browse and search YouTube Music with a logged-in browser session
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "yt-dlp>=2023.12.30",
    "click>=8.1.7",
    "pyyaml>=6.0.1",
    "colorama>=0.4.6",
    "python-dotenv>=1.0.0",
]

setup(
    name="ytmusic-shell",
    version="0.1.0",
    author="ytmusic-shell contributors",
    description="Browse and search YouTube Music with a logged-in browser session",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["ytmusic_shell", "ytmusic_shell.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "ytm-shell=ytmusic_shell.main:cli",
        ],
    },
    keywords="youtube music client cli search playlist",
)
