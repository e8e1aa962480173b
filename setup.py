from glob import glob
from setuptools import setup


setup(
    name='rpncalc',
    version='0.1.0',
    description='RPN calculator model, with a small command shell',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['rpncalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.6',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'bandit',
            'mypy',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
