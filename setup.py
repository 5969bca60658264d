"""
OpenMic Python SDK - Setup

Python client, CLI and workflow nodes for the OpenMic voice-agent API.
"""

from setuptools import setup, find_packages
import os
import re

# Read the README
here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

# Read version without importing the package
with open(os.path.join(here, "openmic", "__init__.py"), encoding="utf-8") as f:
    version = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

setup(
    name="openmic-nodes",
    version=version,
    description="Python SDK, CLI and workflow nodes for the OpenMic voice-agent API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/openmic-ai/openmic-nodes",
    project_urls={
        "Documentation": "https://docs.openmic.ai",
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "httpx>=0.24.0",
        "click>=8.0",
        "rich>=13.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "pytest-cov>=4.0",
            "mypy>=1.0",
            "black>=23.0",
            "ruff>=0.0.270",
            "respx>=0.20",
        ],
    },
    entry_points={
        "console_scripts": [
            "openmic=openmic.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Communications :: Telephony",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Typing :: Typed",
    ],
    keywords=[
        "voice",
        "ai",
        "agent",
        "telephony",
        "openmic",
        "workflow",
        "automation",
    ],
    package_data={
        "openmic": ["py.typed"],
    },
    zip_safe=False,
)
