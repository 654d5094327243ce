"""pipedef packaging setup."""

from setuptools import find_packages, setup

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Install requirements
install_requires = [
    "typer>=0.9.0",
    "pyyaml>=6.0",
    "jsonschema>=4.17.0",
    "rich>=13.0.0",
]

# Development requirements
dev_requires = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
    "black>=23.0.0",
    "flake8>=6.0.0",
    "isort>=5.12.0",
    "mypy>=1.0.0",
]

setup(
    name="pipedef",
    version="1.0.0",
    description="Define CI/CD pipelines as Python classes and publish them to YAML with drift detection",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"pipedef": ["config/*.yaml"]},
    install_requires=install_requires,
    extras_require={
        "dev": dev_requires,
        "test": ["pytest>=7.0.0", "pytest-cov>=4.0.0"],
    },
    entry_points={
        "console_scripts": [
            "pipedef=pipedef.cli:cli_error_handler",
        ],
    },
    python_requires=">=3.9",
    keywords="cicd, pipeline, yaml, pipeline-as-code, drift-detection",
    include_package_data=True,
    zip_safe=False,
)
