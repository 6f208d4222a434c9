# SPDX-License-Identifier: MIT
# Copyright (c) 2025 secretsync contributors

"""Setup configuration for the secretsync OCI Vault provider."""

from setuptools import find_packages, setup

setup(
    name="secretsync-oracle",
    version="0.1.0",
    description="Read-only OCI Vault secrets provider for secret synchronization",
    author="secretsync contributors",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "jsonpath-ng>=1.6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "hypothesis>=6.0.0",
        ],
        "oci": [
            "oci>=2.118.0",
        ],
        "kubernetes": [
            "kubernetes>=28.1.0",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.11",
    ],
)
