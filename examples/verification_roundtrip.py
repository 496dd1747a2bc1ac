"""
Simple end-to-end QR verification roundtrip example.

This simulates:

1. Device A building a verification payload and the URL it renders as a QR code.
2. Device B scanning that QR code and decoding the payload.
3. Device B rejecting a damaged scan.

Key material and the shared secret are placeholders. In a real client they
come from the cross-signing keys and a fresh random secret.
"""

from mxqr.protocol import (
    build_verification_payload,
    build_verification_uri,
    parse_verification_uri,
)


def main() -> None:
    # 1. Device A: payload for an in-progress verification request
    payload = build_verification_payload(
        user_id="@alice:example.org",
        request_id="$verificationRequestEvent",
        keys={
            "1": "aliceMasterKeyBase64",
            "ALICEDEVICE": "aliceDeviceKey+Base64/==",
        },
        shared_secret="LYVcEQmfdorbJ3vbQnq7nbNZc+GmDxUen1rByV9hRM4",
        other_user_key="bobMasterKeyBase64",
    )
    url = build_verification_uri(payload)
    print("QR code content:")
    print(url)
    print()

    # 2. Device B: scan
    scanned = parse_verification_uri(url)
    print("Decoded payload:")
    print(scanned)
    print()
    print("Roundtrip OK:", scanned == payload)

    # 3. Device B: a truncated scan is an invalid QR code, not a crash
    damaged = url.split("&secret=")[0]
    if parse_verification_uri(damaged) is None:
        print("Damaged scan rejected as invalid QR code")


if __name__ == "__main__":
    main()
