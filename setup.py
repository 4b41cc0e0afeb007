import sys
from pathlib import Path

from setuptools import find_packages, setup

if sys.version_info < (3, 10):
    sys.exit("Sorry, Python < 3.10 is not supported.")

README_PATH = Path(__file__).parent / "README.md"
setup(
    name="photomap-sdk",
    packages=find_packages(include=["photomap_sdk", "photomap_sdk.*"]),
    version="0.1.0",
    license="GPL",
    description="Geotagged photo capture, upload and map/gallery projections",
    long_description=README_PATH.read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    author="Photomap",
    author_email="",
    url="https://github.com",
    include_package_data=True,
    keywords=["geotag", "photo", "gis", "upload", "sdk"],
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.6",
        "requests>=2.31",
        "mgrs",
        "pyyaml",
        "fastapi>=0.100",
        "tinydb",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "photomap=photomap_sdk.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: GIS",
    ],
)
