import os

from setuptools import setup

ext_modules = []

# Compiling needs mypy and a C compiler in the build environment, e.g.:
#   QUADINT_USE_MYPYC=1 pip install --no-build-isolation .
# Otherwise the pure python modules are installed as they are.
if os.environ.get("QUADINT_USE_MYPYC", "0") == "1":
    from mypyc.build import mypycify

    # The compiled extensions shadow the .py files shipped next to them.
    ext_modules = mypycify([
        "quadint/quad.py",
        "quadint/number_theory.py",
    ])

setup(
    name="quadint",
    version="0.1.0",
    packages=["quadint"],
    python_requires=">=3.9",
    install_requires=["sympy"],
    extras_require={
        "test": ["pytest"],
        "mypyc": ["mypy"],
    },
    ext_modules=ext_modules,

    license="MIT",
)
