#!/usr/bin/env python
"""
Copyright 2019 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import os
import re

from setuptools import find_packages, setup


def read_version() -> str:
    # XXX: importing namecodec here would need its dependencies installed before they are declared
    version_filepath = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'namecodec', 'version.py')
    with open(version_filepath) as fp:
        match = re.search(r"^__version__ = '([^']+)'$", fp.read(), re.MULTILINE)
    assert match is not None, 'version not found'
    return match.group(1)


setup(
    name='namecodec',
    version=read_version(),
    description='Name-only codec for enum variants and unit types',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('namecodec_tests', 'namecodec_tests.*')),
    package_data={'namecodec.conf': ['*.yml']},
    install_requires=[
        'pydantic>=2,<3',
        'PyYAML>=6',
        'structlog>=22',
        'typing_extensions>=4.4',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
)
