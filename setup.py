from setuptools import find_packages, setup

package_dir = {"": "code"}

setup(
    name='terrainnav',
    version='0.1.0',
    package_dir=package_dir,
    packages=find_packages(where="code"),
    package_data={'terrainnav.cfg': ['default.yaml']},
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
        'matplotlib',
        'seaborn',
        'pyyaml',
        'python-igraph',
        'joblib',
        'networkx',
        'tqdm'
    ],
    extras_require={
        'test': ['pytest']
    },
    entry_points={
        'console_scripts': ['terrainnav=terrainnav.cli:main']
    }
)
