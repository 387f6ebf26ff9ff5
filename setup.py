from setuptools import setup, find_packages

setup(
    name="closure-integrity",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "closure-cross-check=closure_integrity.cli:main",
        ],
    },
    description="Shape checks, classified diagnostics and cross-implementation comparison for CLOSURE results",
    python_requires=">=3.10",
)
