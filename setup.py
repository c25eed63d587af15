# /setup.py
"""
Setup configuration for wgshow.
"""
from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read version from wgshow.py
with open('wgshow/wgshow.py', 'r') as f:
    for line in f:
        if line.startswith('VERSION'):
            version = line.split('=')[1].strip().strip('"\'')
            break

# Read README
readme = Path(__file__).parent / 'README.md'
long_description = readme.read_text() if readme.exists() else ''

setup(
    name='wgshow',
    version=version,
    description='Colorized status viewer for WireGuard interfaces and peers',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='We4Bee Team',
    author_email='dev@we4bee.org',
    packages=find_namespace_packages(include=['wgshow', 'wgshow.*']),
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'click>=8.1.7',
        'rich>=13.7.0',
        'pyyaml>=6.0.1',
        'python-dotenv>=1.0.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
        ]
    },
    entry_points={
        'console_scripts': [
            'wgshow=wgshow:cli'
        ]
    },
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Environment :: Console',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: System :: Networking :: Monitoring',
    ],
    keywords='wireguard, vpn, status, monitoring',
    zip_safe=False,
)
