from setuptools import setup, find_packages

setup(
    name="tiletracer",
    version="1.0.0",
    description="Tile-parallel CPU ray tracer with adaptive sampling",
    packages=find_packages(include=["tiletracer", "tiletracer.*"]),
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "opencv-python>=4.5.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "tiletracer=tiletracer.main:main",
        ],
    },
    python_requires=">=3.9",
)
