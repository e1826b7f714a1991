from setuptools import find_packages, setup

if __name__ == "__main__":
    setup(
        name="keyconvert",
        version="0.1.0",
        description="Convert asymmetric keys between raw, hex, WIF, BIP-39, JWK, PKCS#8 and SSH formats",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.10",
        install_requires=[
            "base58>=2.1",
            "cryptography>=41",
            "mnemonic>=0.20",
            "py-cid>=0.5",
            "py-multihash>=3.0",
            "varint>=1.0.2",
        ],
        extras_require={
            "test": ["pytest>=7"],
        },
    )
