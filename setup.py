from __future__ import absolute_import, division, print_function

from setuptools import find_packages, setup

setup(
    name='jes-spool',
    version='1.0.0',
    description='Client for the z/OS JES spool via FTP',
    packages=find_packages(exclude=[
        'jesspool.test',
        'jesspool.test.*',
    ]),
    install_requires=[
        'chardet',
        'python-dateutil',
        'simplejson',
        'six',
    ],
    extras_require={
        'test': [
            'mock',
            'pytest',
        ],
    },
    entry_points={
        "console_scripts": [
            "jes = jesspool.main:main",
        ],
    }
)
