#!/usr/bin/env python

from setuptools import setup, find_packages

setup(
    name='backstage-datadog-catalog-provider',
    version='0.0.1',
    description='Backstage entity provider for the Datadog Software Catalog',
    author='NBCUniversal',
    license='Apache License 2.0',
    package_dir={'': 'src/common'},
    packages=find_packages(where='src/common', exclude=['tests.*', 'tests']),
    keywords="backstage datadog software-catalog entity-provider",
    python_requires='>=3.11',
    include_package_data=True,
    install_requires=[
        'aws_lambda_powertools',
        'dataclasses-json',
        'requests',
    ],
    extras_require={
        'test': [
            'jsonschema',
            'pytest',
            'pytest-mock',
            'requests-mock',
        ],
    },
    classifiers=[
        'Environment :: Console',
        'Environment :: Other Environment',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3.13',
    ]
)
