"""
Packaging for kraken-client, the Kraken REST API client.

Runtime dependencies are kept in requirements.txt and the project page text
in README.md. Test and lint tooling installs with the ``dev`` extra, and the
``py.typed`` marker ships inside the package.
"""
from setuptools import setup, find_packages

# Long description for PyPI project page
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Base runtime requirements
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="kraken-client",
    version="1.0.0",
    description="Python client for the Kraken exchange REST API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["kraken_client", "kraken_client.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Financial and Insurance Industry",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Office/Business :: Financial :: Investment",
    ],
    keywords=["kraken", "crypto", "exchange", "trading", "api", "client"],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
            "mypy>=1.0",
            "pytest-asyncio>=0.21",
            "pytest-cov>=4.0",
        ],
    },
    package_data={
        # Include typing marker for PEP 561
        "kraken_client": ["py.typed"],
    },
    include_package_data=True,
    zip_safe=False,
)
