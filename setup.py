#!/usr/bin/env python
from setuptools import setup

setup(name='edtd',
      version='0.1',
      description='Parser for the EBML schema definition language',
      packages=['edtd'],
      python_requires='>=3.10',
      install_requires=['lark>=1.2', 'dataslots<1.1'],
      extras_require={'test': ['pytest']},
)
