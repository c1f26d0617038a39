import re
from setuptools import setup, find_packages


def extract_version():
    return re.search(
        r'__version__ = "([\d.d\-]+)"',
        open('src/cadence/__init__.py', 'r', encoding='utf-8').read()).group(1)


if __name__ == '__main__':
    setup(
        name='cadence',
        version=extract_version(),
        description='composable, stateless hyperparameter schedules for iterative optimization.',
        long_description_content_type='text/markdown',
        classifiers=[
            'Programming Language :: Python :: 3.8',
            'Programming Language :: Python :: 3.9',
            'Programming Language :: Python :: 3.10',
            'Programming Language :: Python :: 3.11',
        ],
        package_dir={"": "src"},
        keywords='cadence',
        packages=find_packages('src'),
        python_requires='>=3.8',
        install_requires=[
            'numpy',
            'omegaconf',
            'joblib',
            'rich',
        ],
        extras_require={
            'test': ['pytest', 'torch'],
        },
    )
