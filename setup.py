"""
절차적 위성/소행성대 궤도 생성기 설치 스크립트
"""

from setuptools import setup, find_packages

# 버전 정보
VERSION = "1.0.0"

# README 파일 읽기
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# requirements.txt 파일 읽기
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="procedural-orbit-generator",
    version=VERSION,
    author="Procedural Orbit Generator Team",
    author_email="contact@example.com",
    description="시드 기반 결정론적 위성 배치 및 소행성대 궤도 생성기",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Physics",
        "Topic :: Scientific/Engineering :: Astronomy",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=2.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "orbit-gen=main:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords=[
        "procedural generation",
        "orbital mechanics",
        "moons",
        "asteroid belt",
        "kepler",
        "hill sphere",
        "deterministic seeds",
    ],

    # 메타데이터
    license="MIT",
    platforms=["any"],
)
