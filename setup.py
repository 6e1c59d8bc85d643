from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = f.read().splitlines()

setup(
    name="aquagate",
    version ="0.1",
    packages = find_packages(include=["aquagate", "aquagate.*"]),
    install_requires = requirements,
    extras_require = {"test": ["pytest"]},
)
