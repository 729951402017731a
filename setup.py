from setuptools import find_packages, setup

setup(
    name="scope-guard",
    version="0.1.0",
    license="Apache License 2.0",

    python_requires=">=3.11",
    description="Deferred cleanup actions that run exactly once when a scope "
                "is left.",

    packages=find_packages(exclude=('tests',)),

    install_requires=[
        "toml>=0.10.0,<0.11.0",
        "pydantic>=2.0,<3.0",
    ],

    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },

    test_suite="scope_guard.test",

    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
    ],
)
