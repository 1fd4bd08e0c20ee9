from setuptools import setup, find_packages

setup(
    name='dotmix',
    version='0.1.0',
    author='Thomas Hansen',
    author_email='thomas.hansen@queensu.ca',
    description='Dot-path helpers for nested dicts: deep get/set, merge, flatten, diff and chaining.',
    packages=find_packages(include=['dotmix', 'dotmix.*']),
    include_package_data=True,
    install_requires=[
        'click',
        'pandas',
        'platformdirs',
        'pydantic>=2',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        "console_scripts": [
            # 'dotmix' command will call the main() group in dotmix/cli.py
            "dotmix = dotmix.cli:main",
        ],
    },
    classifiers=[
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
)
