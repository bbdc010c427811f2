from setuptools import setup, find_packages

setup(
    name="dispatch-cli",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0",
        "structlog>=23.1",
        "PyYAML>=6.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "dispatch-cli=dispatch_cli.cli:run",
            "dispatch-cli-shell=dispatch_cli.cli:run_shell",
        ],
    },
    description="Command dispatch engine with a plugin system and agent tool adapter.",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
