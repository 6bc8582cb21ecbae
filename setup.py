from setuptools import setup, find_packages

setup(
    name="petri-ccs",
    version="1.2.0",
    license="AGPL-3.0-or-later",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "click>=8.1",
        "numpy",
        "scipy",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "petri-ccs=petri_ccs.cli:main",
        ],
    },
)
