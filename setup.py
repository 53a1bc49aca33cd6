from setuptools import find_packages, setup

with open("README.md", "r") as fp:
    LONG_DESCRIPTION = fp.read()

setup(
    name="shellwords",
    version="0.1.0",
    description="Split and quote words using the syntax of the POSIX shell",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[],
    python_requires=">=3.8",
    extras_require={
        "test": [
            # Pytest
            "pytest",
            "pytest-cov",
            "hypothesis",
        ],
        "dev": ["black"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
    ],
)
