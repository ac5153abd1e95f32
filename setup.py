""" curvelib build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import curvelib

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=curvelib.name,
    version=curvelib.__version__,
    license=curvelib.__license__,
    author=curvelib.__author__,
    author_email=curvelib.__author_email__,
    description="Elliptic curve arithmetic, ECDSA, and X25519 in pure python",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"curvelib": ["ec/data/*.json"]},
    install_requires=["dataclasses_json>=0.5.7"],
    extras_require={"test": ["pytest", "coincurve"]},
    entry_points={
        "console_scripts": ["curvelib-demo=curvelib.command_line:cmd_demo"]
    },
    keywords=(
        "cryptography elliptic-curves secp256k1 curve25519 ecdsa x25519 "
        "montgomery-ladder SEC1 RFC-7748"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
