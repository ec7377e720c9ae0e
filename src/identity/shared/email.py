"""EmailAddress value object."""

from protean import invariant
from protean.fields import String

from identity.domain import identity

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _is_ip_literal(domain_part):
    return domain_part.startswith("[") and domain_part.endswith("]")


@identity.value_object
class EmailAddress:
    """An email address a customer can be reached at.

    Two addresses are equal when their text is equal; no case folding or
    plus-tag stripping happens, so ``john+changed@doe.com`` is a different
    address from ``john@doe.com``.
    """

    address: String(required=True, max_length=254)

    def __str__(self):
        return self.address

    @invariant.post
    def address_is_well_formed(self):
        email = self.address

        if any(ws in email for ws in (" ", "\t", "\n")) or email.count("@") != 1:
            raise ValueError(f"Invalid email address: {email!r}")

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part[0] == "." or local_part[-1] == ".":
            raise ValueError(f"Invalid email address: {email!r}")

        if not domain_part or domain_part[0] == "." or domain_part[-1] == ".":
            raise ValueError(f"Invalid email address: {email!r}")

        if ".." in local_part or ".." in domain_part:
            raise ValueError(f"Invalid email address: {email!r}")

        if _is_ip_literal(domain_part):
            forbidden = [c for c in _FORBIDDEN_CHARACTERS if c not in "[]"]
        else:
            if "." not in domain_part:
                raise ValueError(f"Invalid email address: {email!r}")
            if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
                raise ValueError(f"Invalid email address: {email!r}")
            forbidden = _FORBIDDEN_CHARACTERS

        if any(c in email for c in forbidden):
            raise ValueError(f"Invalid email address: {email!r}")
