#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

from pyshelf import __version__

__build__ = ''

readme = open('README.rst').read()
history = open('HISTORY.rst').read().replace('.. :changelog:', '')

setup(name='pyshelf',
      version=__version__ + __build__,
      description='Python package index server with upload, simple index and XML-RPC search',
      long_description=readme + '\n\n' + history,
      packages=find_packages(exclude=['*.tests', '*.tests.*']),
      package_data={
          'pyshelf': ['templates/*.html'],
      },
      python_requires='>=3.8',
      install_requires=[
          'Flask>=2.2',
          'redis>=4.0',
          'requests>=2.0.0',
          'python-magic>=0.4.6',
          'pkginfo>=1.9',
          'defusedxml>=0.7',
          'unlzw3>=0.2',
      ],
      extras_require={
          'test': [
              'pytest>=7.0',
              'mock>=4.0',
              'fakeredis>=2.0',
          ],
      },
      entry_points={
          'console_scripts': [
              'pyshelf = pyshelf.development:main',
          ]
      },
      include_package_data=True,
      )
