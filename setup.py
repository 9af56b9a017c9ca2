import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="fhir_schema_to_code",
    version="1.0.0",
    description="Resolve FHIR StructureDefinitions, ValueSets and CodeSystems into a typed graph for code generation",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
        "Intended Audience :: Developers",
    ],
    keywords="fhir hl7 structure definition value set code generation typescript",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fhir_schema_to_code=fhir_schema_to_code.fhir_schema_to_code:fhir_schema_to_code",
        ],
    },
    zip_safe=False,
)
