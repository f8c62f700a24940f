import codecs
import os
import re
import setuptools


here = os.path.abspath(os.path.dirname(__file__))


def read(*parts):
    # intentionally *not* adding an encoding option to open, See:
    #   https://github.com/pypa/virtualenv/issues/201#issuecomment-3145690
    with codecs.open(os.path.join(here, *parts), 'r') as fp:
        return fp.read()


def find_version(*file_paths):
    version_file = read(*file_paths)
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


setuptools.setup(
    name='propindex',
    version=find_version('src', 'propindex', '__init__.py'),
    author="PropIndex maintainers",
    packages=setuptools.find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    license='GPLv3',
    description="Spatial indexing and querying of property listings.",
    long_description=read('README'),
    python_requires=">=3.7",
    install_requires=[
        "numpy >= 1.16",
        "pandas >= 0.24",
        "shapely >= 1.6",
        "toolz >= 0.7.4",
    ],
    extras_require={
        "test": ["pytest >= 4.0"],
    },
    entry_points='''
        [console_scripts]
        propindex=propindex.cli:main
        '''
)
