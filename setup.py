from setuptools import setup, find_packages

setup(
    name="lunch_menus",
    version="0.2",
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'httpx',
        'python-dotenv',
        'PyYAML',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-mock',
        ],
    },
)
