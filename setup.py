"""Setup file for dexarb package"""
from setuptools import setup, find_packages

setup(
    name="dexarb",
    version="1.0.0",
    packages=find_packages(exclude=["test", "test.*"]),
    package_data={"dexarb": ["abi/*.json"]},
    install_requires=[
        "web3>=7.0.0",
        "eth-utils>=4.0.0",
        "eth-account>=0.13.0",
        "aiohttp>=3.8.0",
        "python-dotenv>=0.19.0",
        "python-json-logger>=2.0.0",
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-asyncio>=0.21.0',
            'hexbytes>=1.0.0',
        ],
        'dev': [
            'pytest',
            'pytest-asyncio',
            'pytest-cov',
            'black',
            'isort',
            'mypy',
            'pylint'
        ]
    },
    python_requires='>=3.8',
    description="Two-hop Uniswap/Sushiswap arbitrage bot for mainnet forks",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
