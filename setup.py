from glob import glob
from setuptools import setup, find_packages


setup(
    name='fincalc',
    # No git metadata in source distributions.
    use_scm_version={'fallback_version': '0.1.0'},
    description='Financial and scientific RPN calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.6',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'bandit',
            'mypy',
            'safety',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
