from os import path
from re import match, search, S
from setuptools import setup

HERE = path.abspath(path.dirname(__file__))

with open(path.join(HERE, 'mw_gateway', '__init__.py'), 'r') as f:
    longdesc = match('^"""(.*?)"""', f.read(), S).group(1)

with open(path.join(HERE, 'mw_gateway', 'utils.py'), 'r') as f:
    version = search(r'__version__\s*=\s*[\'"]([^\'"]+)[\'"]', f.read()).group(1)

setup(
    name="mw-gateway",
    version=version,
    description="A MediaWiki API client speaking XML over HTTP.",
    long_description=longdesc,
    long_description_content_type='text/x-rst',
    license="MIT",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Wiki',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='mediawiki api requests xml',
    packages=["mw_gateway", "mw_gateway.tests"],
    install_requires=['requests'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.6',
)
