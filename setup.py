"""
   See the NOTICE file distributed with this work for additional information
   regarding copyright ownership.

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

from setuptools import setup, find_packages

setup(
    name='ensembl_seq_region',
    version='0.1.0',
    description='Load coordinate systems and seq_regions into Ensembl core databases',
    license='Apache 2.0',
    classifiers=[
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Scientific/Engineering :: Bio-Informatics'
    ],
    packages=find_packages(),
    include_package_data=True,
    python_requires='>=3.9',
    install_requires=[
        'pymysql>=1.0.2',
        'sqlalchemy>=1.4.9'
    ],
    extras_require={
        'test': ['pytest'],
        'dev': ['pytest', 'pylint'],
    },
    tests_require=[
        'pytest',
    ],
    entry_points={
        'console_scripts': ['load_seq_region=ensembl_seq_region.load_seq_region:main']
    }

)
