from setuptools import setup, find_packages

setup(
    name="ridehub-backend",
    version="0.1.0",
    packages=find_packages(exclude=["ridehub.tests", "ridehub.tests.*"]),
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.15.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "sqlalchemy>=2.0.0",
        "PyJWT>=2.4.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.23.0",
        ],
    },
    python_requires=">=3.8",
)
