from setuptools import setup, find_namespace_packages

setup(
    name='resplite',
    version='1.0',
    description='A minimal RESP key/value server with PING, GET and SET',
    packages=find_namespace_packages(include=['resplite', 'resplite.*']),
    install_requires=[],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
        ],
    },
    entry_points={
        'console_scripts': [
            'resplite-cli = resplite.client.client_main:main',
            'resplite-server = resplite.main:main',
        ],
    },
    python_requires='>=3.10',
)
