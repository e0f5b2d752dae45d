from setuptools import setup, find_packages
import re

# Read version from cukai/__init__.py
with open('cukai/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='cukai',
    version=version,
    packages=find_packages(include=['cukai', 'cukai.*']),
    package_data={
        'cukai.sdk.taxes': ['data/*.yaml'],
    },
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
            'cukai=cukai.cli.__main__:main',
            'cukai-mcp=cukai.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Malaysian SME tax computations: deductions, SST-02 periods, EA forms.',
    python_requires='>=3.10',
)
