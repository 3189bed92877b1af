"""Setup script for UndoCalc - calculator with undo/redo history."""

from setuptools import setup, find_packages

# Read the README file
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read requirements
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="undocalc",
    version="1.0.0",
    description="Arithmetic accumulator with linear undo/redo history and a terminal UI",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["undocalc", "undocalc.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Environment :: Console",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "undocalc=undocalc:main",
        ],
    },
    include_package_data=True,
    package_data={
        "undocalc": [
            "styles.tcss",
        ],
    },
    zip_safe=False,
)
