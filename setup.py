# Created on Mon Apr 08 10:12:31 2019

# Author: XiaoTao Wang
# Organization: HuaZhong Agricultural University

"""
Setup script for firelib (Detecting Frequently Interacting Regions and
super-FIREs from Hi-C data).

This is a free software under GPLv3. Therefore, you can modify, redistribute
or even mix it with other GPL-compatible codes. See the file LICENSE
included with the distribution for more details.

"""
import os, sys, firelib, glob
import setuptools

def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()

if (sys.version_info.major!=3) or (sys.version_info.minor<7):
    print('PYTHON 3.7+ IS REQUIRED. YOU ARE CURRENTLY USING PYTHON {}'.format(sys.version.split()[0]))
    sys.exit(2)

# Guarantee Unix Format
for src in glob.glob('scripts/*'):
    text = open(src, 'r').read().replace('\r\n', '\n')
    open(src, 'w').write(text)

setuptools.setup(
    name = 'firelib',
    version = firelib.__version__,
    author = firelib.__author__,
    description = 'Detecting Frequently Interacting Regions (FIREs) and super-FIREs from Hi-C data',
    keywords = 'FIRE super-FIRE HiCNormCis Hi-C cooler',
    long_description = read('README.rst'),
    long_description_content_type='text/x-rst',
    scripts = glob.glob('scripts/*'),
    packages = setuptools.find_packages(),
    install_requires = ['numpy', 'scipy', 'pandas', 'statsmodels', 'cooler', 'matplotlib'],
    extras_require = {'test': ['pytest']},
    classifiers = [
        'Programming Language :: Python',
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Operating System :: POSIX',
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Bio-Informatics'
        ]
    )
