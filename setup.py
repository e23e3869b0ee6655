from setuptools import find_packages, setup

setup(
    name="roomba-cleaner",
    version="2.2.0",
    description="Drive-aware cleaner for caches, history and logs: shreds on spinning disks, unlinks on flash.",
    packages=find_packages(include=["roomba", "roomba.*"]),
    python_requires=">=3.12",
    install_requires=[
        "psutil>=5.9",
        "result>=0.16",
        "rich>=13.0",
        "textual>=0.47",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "roomba=roomba.cli:main",
        ],
    },
)
