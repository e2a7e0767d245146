from setuptools import setup, find_packages
from pathlib import Path

def parse_requirements(filename):
    return [line.strip() for line in Path(filename).read_text().splitlines()
            if line.strip() and not line.startswith("#")]

setup(
    name="cyclus",
    version="1.0.0",
    description="Dependency injection and lifecycle orchestration for in-process components",
    package_dir={"": "src"},
    packages=find_packages("src", include=["cyclus", "cyclus.*"]),
    python_requires=">=3.9",
    install_requires=parse_requirements("requirements.txt"),
    extras_require={"dev": parse_requirements("requirements-test.txt")}
)
