from setuptools import setup, find_packages

setup(
    name="promptfiles",
    version="0.1.0",
    description="A tool that turns a natural-language prompt into generated source files on disk",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.5",
        "pyyaml>=6.0",
        "langchain-core>=0.3",
        "langchain-google-genai>=2.0",
        "langchain-openai>=0.2",
        "langchain-anthropic>=0.2",
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        'console_scripts': [
            'promptfiles=promptfiles.cli:cli',
        ],
    },
    python_requires=">=3.9",
)
