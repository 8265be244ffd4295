from setuptools import setup, find_packages

setup(
   name='ternarygenus',
   version='1.0',
   description='Genera of ternary quadratic forms and Hecke operators on spinor character subspaces',
   author='Brandon Williams',
   author_email='btw@math.berkeley.edu',
   packages=find_packages(exclude=['tests']),
   install_requires=['passagemath-standard', 'cypari2'],
   extras_require={'test': ['pytest']},
)
