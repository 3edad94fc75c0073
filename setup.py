# setup.py
from setuptools import setup, find_packages

setup(
    name="pexpr",
    version="0.3.0",
    description="A minimal prefix-notation expression language with a single-pass evaluator",
    packages=find_packages(include=["pexpr", "pexpr.*", "pexpr_lsp", "pexpr_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "pexpr=pexpr.repl:main",
            "pexpr-repl-server=pexpr_lsp.repl_server:main",
            "pexpr-ls=pexpr_lsp.server:main",
        ],
    },
    zip_safe=False,
)
