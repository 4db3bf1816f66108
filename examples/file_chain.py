"""Example: Chaining compression and encryption stages around a file.

Writes a payload through a chain of stages, shows the raw stored value, and
reads it back. With --order swapped, the stored value changes but the
round trip still holds.
"""

import argparse

from patternkit import BaseComponent, CompressionStage, DecoratorChain, EncryptionStage


def main():
    parser = argparse.ArgumentParser(
        description="Demonstrate decorator chaining with invertible stages"
    )
    parser.add_argument(
        "--data",
        type=str,
        default="Ok",
        help="Payload to write through the chain (default: Ok)",
    )
    parser.add_argument(
        "--order",
        type=str,
        choices=["encrypt-compress", "compress-encrypt"],
        default="encrypt-compress",
        help="Wrapping order, innermost first (default: encrypt-compress)",
    )
    args = parser.parse_args()

    if args.order == "encrypt-compress":
        stages = [EncryptionStage, CompressionStage]
    else:
        stages = [CompressionStage, EncryptionStage]

    chain = DecoratorChain(BaseComponent(initial="Data"), stages)
    print(f"Chain: {chain!r}")

    print("--- Writing Data ---")
    chain.write(args.data)
    print(f"Stored: {chain.stored}")

    print("--- Reading Data ---")
    data = chain.read()
    print(f"Final data: {data}")
    print(f"Round trip: {data == args.data}")


if __name__ == "__main__":
    main()
