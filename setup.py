"""
Setup file.
"""

from setuptools import setup

KEYWORDS = "android ndk clang cross-compile abi native build toolchain"


if __name__ == "__main__":
    setup(
        keywords=KEYWORDS,
        include_package_data=True)
