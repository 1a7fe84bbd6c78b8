# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="hostguard",
    version="1.0.0",
    description="Exception-safe wrappers and hour-partitioned error logging for unreliable host APIs",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["hostguard", "hostguard.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "gui": [
            "customtkinter",  # Diagnostics console for the secondary sink
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'hostguard=hostguard.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
