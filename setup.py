from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'pymongo>=3.12',
    'coloredlogs>=15.0',
]

setup(
    name='nftledger',
    version=__version__,
    description='Non-fungible token ownership ledger over a pluggable key-value store.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
