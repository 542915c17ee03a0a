from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = f.read().splitlines()

setup(
    name="godrive",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"godrive": ["api/templates/*.html"]},
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0.0", "responses>=0.23.0"],
    },
    entry_points={
        "console_scripts": [
            "godrive=godrive.cli_module.cli:main",
        ],
    },
)
