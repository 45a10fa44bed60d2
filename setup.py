from setuptools import setup, find_packages

setup(
    name="mediamover",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click",
        "python-dotenv",
        "pydantic>=2",
        "rich",
        "toml",
        "boto3",
        "botocore",
        "supabase>=2",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "mediamover = mediamover.main:start_cli",
        ],
    },
    author="Joel M",
    author_email="jtmcn.dev@gmail.com",
    description="A command-line tool for inspecting Supabase Storage buckets and migrating them to Cloudflare R2.",
    license="MIT",
    keywords="supabase storage r2 s3 migration",
)
