from setuptools import find_namespace_packages, setup

setup(
    name="subsync-backend",
    version="1.0.0",
    package_dir={"": "backend"},
    packages=find_namespace_packages(where="backend", include=["services*", "shared*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "python-multipart>=0.0.9",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
    include_package_data=True,
    description="Backend package for SubSync (subtitle upload and WebVTT normalization)",
)
