# setup.py
from setuptools import setup, find_packages

setup(
    name="bucket_scout",
    version="0.1.0",
    description="Асинхронный перебор имён S3-бакетов BucketScout",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "bucket_scout": ["data/*.txt", "report/templates/*.j2"],
    },
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.4", "pytest-asyncio>=0.23"],
    },
    entry_points={
        "console_scripts": ["bucket-scout=bucket_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
