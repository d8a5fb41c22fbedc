from os import path

import setuptools

with open('README.md', encoding='utf-8') as fh:
    long_description = fh.read()

# extract version
path = path.realpath('src/gaussfit/_version.py')
version_ns = {}
with open(path, encoding='utf8') as f:
    exec(f.read(), {}, version_ns)
version = version_ns['__version__']

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setuptools.setup(
    name='gaussfit',
    version=version,
    description='Point-wise Gaussian model functions with analytic \
        derivatives for massively parallel least-squares fitting.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: OS Independent',
    ],
    entry_points={
        'console_scripts': [
            'gaussfit = gaussfit.launcher:main',
        ],
    },
    package_dir={'': 'src'},
    packages=setuptools.find_packages(where='src'),
    python_requires='>=3.9',
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
        'examples': ['scipy'],
    },
)
