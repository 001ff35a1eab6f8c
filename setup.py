from setuptools import setup, find_packages

setup(
    name="connect4-engine",
    version="0.1.0",
    description="Rules engine and turn state machine for two-player Connect Four",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # Environment adapter in connect4_engine.interfaces.env
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "connect4=connect4_engine.interfaces.cli:main",
        ],
    },
)
