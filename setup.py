from setuptools import setup, find_packages

setup(
    name='passindex',  # Required
    version='0.1.0',  # Required, follows semantic versioning
    author='Jake Swann',  # Optional
    author_email='jake.swann.22@ucl.ac.uk',  # Optional
    description='passindex - parameter resolution and signal preparation for pass-index phase precession',  # Optional
    long_description=open('README.md').read(),  # Optional, long description read from the README file
    long_description_content_type='text/markdown',  # Optional, to specify the content type of the long description
    package_dir={'': 'src'},
    packages=find_packages('src'),  # Required, automatically find packages under src/
    classifiers=[  # Optional, additional metadata about your package
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',  # Optional, specify the Python versions supported
    install_requires=[  # Optional, list of dependencies
        'numpy',
        'scipy',
        'pandas',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={},  # Optional, if you have console scripts to expose
)
