# setup.py - Package the correlated pair miner
from setuptools import setup, find_packages

setup(
    name="phicorr",
    version="0.1.0",
    description="Find highly phi-correlated item pairs with minhash and LSH banding",
    packages=find_packages(include=["phicorr", "phicorr.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21",
        "mmh3>=4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "phicorr=phicorr.cli:main",
        ],
    },
)
