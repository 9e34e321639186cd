from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="cmfuncs",
    version="0.1.0",
    description="Function library for a configuration-management DSL.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"cmfuncs.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["PyYAML", "jsonschema"],
    extras_require={"dev": ["pytest"], "test": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["cmfuncs=cmfuncs.cli:main"]},
)
