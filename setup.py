from setuptools import setup, find_packages

setup(
    name="cellref",
    version="0.1.0",
    packages=find_packages(include=['cellref', 'cellref.*']),
    include_package_data=True,
    install_requires=[
        'Click',
        'pandas',
        'pyyaml',
        'rich>=13.9.0',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'cellref=cellref.src.cli.main:cli',
        ],
    },
)
