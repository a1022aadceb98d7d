#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

requirements = [
    'packaging',
]

color_requirements = [
    'pygments',
    'colorful',
]

test_requirements = [
    'pytest',
    *color_requirements,
]

setup(
    name='relaxed-format',
    version='0.1.0',
    description="Elixir code formatting with relaxed spacing inside brackets",
    long_description=readme,
    author="Tommi Kaikkonen",
    author_email='kaikkonentommi@gmail.com',
    packages=find_packages(include=['relaxed_format', 'relaxed_format.*']),
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        'color': color_requirements,
        'test': test_requirements,
    },
    python_requires='>=3.6',
    license="MIT license",
    zip_safe=False,
    keywords='relaxed_format elixir formatter pretty-printer',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3.6',
    ],
    test_suite='tests',
    tests_require=test_requirements,
)
