from setuptools import setup, find_packages
import re

# Read version from taxcalc/__init__.py
with open('taxcalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='taxcalc',
    version=version,
    packages=find_packages(include=['taxcalc', 'taxcalc.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'tax-calc=taxcalc.cli.__main__:main',
            'tax-calc-mcp=taxcalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Forward and inverse tax calculations over flat rate lists.',
    python_requires='>=3.10',
)
