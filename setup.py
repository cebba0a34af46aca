from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="dynroute",
    version="0.1.0",
    description="Dynamic shortest-path routing to the nearest of several destinations.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"dynroute.schemas": ["*.json"]},
    python_requires=">=3.9",
    install_requires=["networkx", "pyyaml", "jsonschema"],
    extras_require={"dev": ["pytest"]},
    entry_points={"console_scripts": ["dynroute=dynroute.cli:main"]},
)
