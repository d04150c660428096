# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import uvicorn

from verifier.config import VerifierConfig


def main() -> None:
    config = VerifierConfig()
    # HTTP, TLS is expected to be terminated in front of the verifier
    uvicorn.run("verifier.verifier:app", host=config.host, port=config.port, reload=config.enable_debug_mode)


if __name__ == '__main__':
    main()
