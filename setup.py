from setuptools import find_packages, setup

with open("requirements.txt", "r", encoding="UTF-8") as f:
    required = f.read().splitlines()

setup(
    name="abiclient",
    version="0.1",
    description="Typed async clients for smart contracts, generated from their abi.",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"abiclient.codegen": ["templates/*.jinja2"]},
    install_requires=required,
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "abiclient-generate=abiclient.scripts.generate_client:main",
            "abiclient-generate-all=abiclient.scripts.generate_all_clients:main",
        ]
    },
)
