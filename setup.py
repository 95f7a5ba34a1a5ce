# setup.py
from setuptools import setup, find_packages

setup(
    name="fstree",
    version="0.1.0",
    description="Filesystem snapshot trees with size aggregation, rendering and a round-trip codec",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'fstree=fstree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
