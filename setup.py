from setuptools import setup, find_packages

setup(
    name="tweet_gyazo",
    version="1.0.0",
    packages=find_packages(include=["tweet_gyazo", "tweet_gyazo.*"]),
    install_requires=[
        "aiohttp>=3.8.1,<3.14",
        "fastapi>=0.100.0",
        "oauthlib>=3.2.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=0.19.0",
        "uvicorn>=0.15.0",
    ],
    extras_require={
        "test": [
            "aioresponses>=0.7.4",
            "httpx>=0.24.0",
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    python_requires=">=3.8",
    description="Relay the photos of a tweet to Gyazo",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
