"""Checks that a usable GitHub credential is stored before any remote call."""

import logging
from typing import Union

from pydantic import SecretStr

from ..protocols import CredentialStoreProtocol
from ..schemas import Blocked, BlockReason, Credential

logger = logging.getLogger(__name__)


class CredentialGate:
    """Reads the credential store and rejects missing or blank tokens."""

    def check(self, credential_store: CredentialStoreProtocol) -> Union[Credential, Blocked]:
        credential = credential_store.get()
        if credential is None:
            logger.debug("No GitHub connection stored")
            return Blocked(reason=BlockReason.NO_CREDENTIAL)

        token = credential.token.get_secret_value().strip()
        if not token or not credential.identity.login.strip():
            logger.debug("Stored GitHub connection has no usable token")
            return Blocked(reason=BlockReason.NO_CREDENTIAL)

        return credential.model_copy(update={"token": SecretStr(token)})
