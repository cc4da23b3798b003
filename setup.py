"""Package setup for mati-sdk."""

from setuptools import setup

setup(
    name="mati-sdk",
    version="1.0.0",
    description="Python client for the Mati identity-verification API",
    packages=["mati_sdk"],
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.25.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
)
