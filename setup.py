"""Setup script for dbsource."""

from setuptools import find_packages, setup

setup(
    name="dbsource",
    version="0.1.0",
    description="Unified datasource descriptors, URLs and table discovery for many SQL engines",
    author="dbsource Team",
    packages=find_packages(include=["dbsource", "dbsource.*"]),
    install_requires=[
        "sqlalchemy>=2.0.0",  # Engine URLs and connections
        "psycopg2-binary>=2.9.0",  # PostgreSQL driver
        "typer>=0.9.0",  # Modern CLI framework
        "rich>=13.0.0",  # Terminal output
        "pyyaml>=6.0",  # Configuration handling
        "python-dotenv>=1.0.0",  # .env loading
    ],
    package_data={
        "dbsource": ["py.typed"],
    },
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.1.0",
            "black>=22.1.0",
            "isort>=5.10.1",
            "flake8>=4.0.1",
            "mypy>=1.0.0",  # Type checking
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.1.0",
        ],
        # Optional drivers, one extra per engine family
        "mysql": ["pymysql>=1.0.0"],
        "hive": ["pyhive[hive]>=0.7.0"],
        "presto": ["pyhive[presto]>=0.7.0"],
        "clickhouse": ["clickhouse-sqlalchemy>=0.3.0"],
        "oracle": ["oracledb>=1.0.0"],
        "sqlserver": ["pymssql>=2.2.0"],
        "db2": ["ibm_db_sa>=0.4.0"],
    },
    entry_points={
        "console_scripts": [
            "dbsource=dbsource.cli.main:cli",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Database",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
