"""Install configuration for the bikegraph package"""
from setuptools import find_packages, setup

setup(
    name="bikegraph",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["bikegraph", "bikegraph.*"]),
    python_requires=">=3.9",
    install_requires=[
        "networkx>=3.2.0",
        "tqdm>4.6.0",
        "numpy>=1.26.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "geopy>=2.4.0",
        ],
    },
    entry_points={
        "console_scripts": ["bikegraph=bikegraph.cli:main"],
    },
)
