# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

import logging

from rulestate import RuleResult, Validation

# Basic logging setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logging.getLogger("rulestate").setLevel(logging.DEBUG)


class SignupForm:
    """A stand-in for host-owned UI state. rulestate never mutates it."""

    def __init__(self):
        self.name = ""
        self.password = ""
        self.confirm = ""

    def rules(self):
        # Rebuilt on every change cycle, exactly like a render function would.
        return {
            "name_entered": (self.name, lambda s: len(s) > 0),
            "password_long": (self.password, lambda s: len(s) >= 8),
            "passwords_match": (
                {"password": self.password, "confirm": self.confirm},
                lambda v: v["password"] == v["confirm"],
            ),
        }


def on_result_change(name: str, previous: RuleResult, current: RuleResult):
    logging.info("Hint for '%s' changed: %s -> %s", name, previous.value, current.value)


def main():
    form = SignupForm()

    with Validation(form.rules(), validate_on_change=True) as validation:
        validation.subscribe(on_result_change)

        print("\n--- Fresh form: nothing validated yet ---")
        print("valid:  ", dict(validation.valid))
        print("invalid:", dict(validation.invalid))

        print("\n--- onChange handler validates the new name before the next refresh ---")
        form.name = "Alice"
        validation.validate("name_entered", form.name)
        validation.refresh(form.rules())

        print("\n--- Typing a short password triggers automatic revalidation ---")
        form.password = "short"
        validation.refresh(form.rules())

        print("\n--- Re-rendering with identical values triggers nothing ---")
        validation.refresh(form.rules())

        print("\n--- Submit: validate every rule ---")
        form.password = form.confirm = "long-enough"
        validation.refresh(form.rules())
        ok = validation.validate()
        print("submit allowed:", ok)
        print("results:", {name: result.value for name, result in validation.results.items()})


if __name__ == "__main__":
    main()
