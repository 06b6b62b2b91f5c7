from setuptools import setup, find_namespace_packages

# Read requirements.txt
with open('requirements.txt') as f:
    requirements = [
        line.strip()
        for line in f
        if line.strip() and not line.startswith('#')
    ]

setup(
    name="scorebook",
    version="0.1.0",
    packages=find_namespace_packages(where="src", include=["scorebook", "scorebook.*"]),
    package_dir={"": "src"},
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "scorebook=scorebook.main:main",
        ],
    },
    python_requires=">=3.10",
)
