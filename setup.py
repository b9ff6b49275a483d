"""
Setup script for the vfa_lib package.
"""

from setuptools import setup, find_packages

setup(
    name="linear-vfa",
    version="0.1.0",
    description="Linear Value Function Approximation for Reinforcement Learning",
    packages=find_packages(),
    install_requires=[
        "numpy>=1.20.0",
    ],
    python_requires=">=3.7",
)
