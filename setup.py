from codecs import open
from os import path

from setuptools import find_packages, setup

here = path.abspath(path.dirname(__file__))

with open(path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="ci-dashboard",
    version="0.1.0",
    packages=find_packages(exclude=["contrib", "docs", "tests*"]),
    description="Bundle size comparisons and React profiler reports from CI artifacts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    install_requires=[
        "cerberus",
        "httpx>=0.23.0",
        "orjson",
        "prometheus-client",
        "pyyaml",
        "sentry-sdk>=2.13.0",
    ],
    extras_require={
        "tests": [
            "pytest",
            "pytest-asyncio",
            "pytest-mock",
            "respx",
        ],
    },
)
