"""
python -m build
twine upload dist/*
"""

from setuptools import setup, find_packages


def mockrest_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    version = "1.0.0"

    setup(
        name="mockrest",
        packages=find_packages(exclude=["tests", "tests.*"]),
        package_data={"mockrest": ["data/*.json"]},
        version=version,
        license="MIT",
        description="mockrest : convention-driven REST API and OpenAPI docs for a JSON document",
        long_description=open("README.rst").read(),
        keywords=["Flask", "REST", "Mock", "OpenAPI", "Swagger", "JSON"],
        python_requires=">=3.8, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "License :: OSI Approved :: MIT License",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Software Development :: Testing :: Mocking",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3.12",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.8",
        ],
        entry_points={"console_scripts": ["mockrest=mockrest.app:main"]},
        extras_require={"test": ["pytest>=7"]},
    )


mockrest_setup()  # pragma: no cover
