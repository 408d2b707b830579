from setuptools import find_packages, setup

setup(
    name="ilert-api",
    version="1.0.0",
    license="Apache License 2.0",

    python_requires=">=3.12",
    description="Typed client for the iLert incident management REST API.",

    packages=find_packages(exclude=("tests", "tests.*")),

    install_requires=[
        "httpx>=0.27,<1.0",
        "pydantic~=2.7",
        "pydantic-settings~=2.3",
        "structlog>=24.1",
        "prometheus-client>=0.20,<1.0",
    ],

    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },

    test_suite="tests",

    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.12',
    ],
)
