"""Setup configuration for price-predictor package."""

import re
from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Read version from __init__.py without importing the package
init_text = (this_directory / "price_predictor" / "__init__.py").read_text(encoding="utf-8")
version = re.search(r'^__version__ = "([^"]+)"', init_text, re.MULTILINE).group(1)

setup(
    name="price-predictor",
    version=version,
    author="quinn",
    author_email="your.email@example.com",
    description="A statistical short-horizon stock price forecaster with confidence scoring",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/price_predictor",
    project_urls={
        "Bug Tracker": "https://github.com/yourusername/price_predictor/issues",
        "Documentation": "https://github.com/yourusername/price_predictor/blob/main/README.md",
        "Source Code": "https://github.com/yourusername/price_predictor",
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Financial and Insurance Industry",
        "Intended Audience :: Developers",
        "Topic :: Office/Business :: Financial :: Investment",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "yfinance>=0.2.28",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.5.0",
            "isort>=5.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "price-predictor=price_predictor.fetch_prices:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
