# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""setup.py for libCrashReporter."""
import setuptools

with open('README.md', 'r') as fh:
  long_description = fh.read()

setuptools.setup(
    name='crashreporter',
    version='0.0.1',
    description='Crash report callstack parsing',
    long_description=long_description,
    long_description_content_type='text/markdown',
    package_dir={'': 'src'},
    packages=setuptools.find_packages('src'),
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
    ],
    install_requires=[
        'PyYAML',
    ],
    extras_require={
        'test': [
            'mock',
            'parameterized',
            'pyfakefs',
            'pytest',
        ],
    },
    package_data={
        'crashreporter': ['lib-config/*'],
    },
    entry_points={
        'console_scripts': [
            'crashreporter-format=crashreporter.format.__main__:main',
        ],
    },
    python_requires='>=3.9',
    zip_safe=False,
)
