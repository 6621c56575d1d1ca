from setuptools import setup

setup(
    name="pughtml",
    version="0.1.0",
    description="Pug-style indented markup that compiles to html",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=['pughtml'],
    python_requires=">=3.8",
    install_requires=[
        "watchdog",
        "pyyaml"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["pughtml=pughtml.__main__:main"],
    },
)
