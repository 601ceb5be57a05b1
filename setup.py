from setuptools import setup

with open("VERSION", "r") as r:
    __version__ = r.read().strip()

setup(
    name="dirstat",
    version=__version__,
    description="Directory tree size statistics, file and word search, and empty-entry pruning",
    long_description="",
    packages=["dirstat"],
    install_requires=["humanfriendly"],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["dirstat=dirstat.__main__:main"],
    },
    zip_safe=False,
    python_requires=">=3.10",
    license="LGPL-2.1-or-later",
    classifiers=[
        "License :: OSI Approved :: GNU Lesser General Public License v2 or later (LGPLv2+)",
    ],
)
