import glob
import os

from setuptools import find_packages, setup

top_level_modules = [os.path.splitext(os.path.basename(p))[0] for p in glob.glob('src/*.py')]

setup(
    name='sheets_cache',
    version='0.1.0',
    packages=find_packages(where='src', exclude=['tests', 'tests.*']),
    package_dir={'': 'src'},
    py_modules=top_level_modules,
    include_package_data=True,
    description='Google Sheets gviz fetcher and local JSON cache builder',
    python_requires='>=3.10',
    install_requires=[
        'httpx>=0.24',
        'loguru>=0.7',
        'pydantic>=2.0',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
    entry_points={
        'console_scripts': ['refresh-sheets-cache=main:run'],
    },
)
