from setuptools import find_packages, setup

setup(
    name="datapipe",
    version="0.1.0",
    description="Client for describing and querying Data Pipeline objects",
    packages=find_packages(include=["datapipe", "datapipe.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31",
        "pydantic>=2.4",
        "PyYAML>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "datapipe=datapipe.cli:main",
        ],
    },
)
