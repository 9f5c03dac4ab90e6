#!/usr/bin/env python3
"""
Setup script for Blogsmith - Markdown blog builder.
"""

from setuptools import setup, find_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='blogsmith',
    version='1.0.0',
    description='Builds a static blog from a directory of Markdown posts',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'blogsmith_pkg': [
            'templates/*.html',
        ],
    },
    include_package_data=True,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP :: Site Management',
        'Topic :: Software Development :: Code Generators',
        'Topic :: Text Processing :: Markup :: HTML',
    ],
    # htmlmin imports the cgi module, which Python 3.13 removed
    python_requires='>=3.8,<3.13',
    install_requires=[
        'Jinja2>=3.0',
        'mistune>=2.0',
        'beautifulsoup4>=4.9',
        'htmlmin>=0.1.12',
        'PyYAML>=5.1',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'blogsmith=blogsmith_pkg.cli:main',
        ],
    },
    keywords='static site generator, markdown, jinja2, blog',
)
