#!/usr/bin/env python3
"""
DOM Kernel Setup
"""

from setuptools import setup, find_packages

# Read requirements from requirements.txt
with open('requirements.txt') as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith('#')]

# Read long description from README.md
with open('README.md', 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name="dom-kernel",
    version="0.1.0",
    description="A node tree with traversal, query, mutation and event dispatch",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["dom_kernel", "dom_kernel.*"]),
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "dom-kernel=dom_kernel.main:main",
        ],
    },
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Text Processing :: Markup :: HTML",
    ],
    keywords="dom, html, tree, events",
)
