"""
Tests for the branch, client and account registries
"""

import pytest

from bank_ledger.accounts import Account
from bank_ledger.directory import AccountNotFoundError, Branch, Client, Directory


class TestBranch:
    """Test Branch naming"""

    def test_full_name_is_zero_padded(self):
        assert Branch(id=1, name="Centro").full_name == "001 - Centro"
        assert Branch(id=42, name="Bairro").full_name == "042 - Bairro"


class TestDirectory:
    """Test Directory registration and lookup"""

    def setup_method(self):
        """Set up test fixtures"""
        self.directory = Directory()
        self.branch = self.directory.register_branch(
            Branch(id=self.directory.next_branch_id(), name="Centro")
        )
        self.client = self.directory.register_client(Client(
            id=self.directory.next_client_id(),
            name="Alice Silva",
            cpf="111.111.111-11",
            branch_id=self.branch.id,
        ))

    def _open_account(self, client):
        account = Account(
            account_id=self.directory.next_account_id(),
            client_id=client.id,
            branch_id=client.branch_id,
        )
        return self.directory.register_account(account)

    def test_sequences_start_at_one(self):
        """Test ids are handed out from 1 upwards"""
        directory = Directory()
        assert directory.next_branch_id() == 1
        assert directory.next_branch_id() == 2
        assert directory.next_client_id() == 1
        assert directory.next_account_id() == 1

    def test_register_account_links_client(self):
        """Test registering an account sets the client's account id"""
        account = self._open_account(self.client)

        assert account.id == 1
        assert self.client.account_id == 1
        assert self.directory.require_account(1) is account
        assert self.directory.accounts_of(self.branch.id) == [account]

    def test_account_ids_are_unique(self):
        """Test account numbers never repeat"""
        second = self.directory.register_client(Client(
            id=self.directory.next_client_id(), name="Beto Souza",
            cpf="222.222.222-22", branch_id=self.branch.id,
        ))
        first_account = self._open_account(self.client)
        second_account = self._open_account(second)

        assert first_account.id != second_account.id
        assert [a.id for a in self.directory.accounts()] == [1, 2]

    def test_duplicate_registration_rejected(self):
        """Test an id cannot be registered twice"""
        with pytest.raises(ValueError):
            self.directory.register_branch(Branch(id=self.branch.id, name="Other"))
        with pytest.raises(ValueError):
            self.directory.register_client(Client(
                id=self.client.id, name="X", cpf="0", branch_id=self.branch.id
            ))

    def test_client_requires_known_branch(self):
        """Test a client cannot reference a missing branch"""
        with pytest.raises(ValueError):
            self.directory.register_client(Client(id=99, name="X", cpf="0", branch_id=7))

    def test_client_holds_one_account(self):
        """Test a client cannot get a second account"""
        self._open_account(self.client)
        with pytest.raises(ValueError):
            self._open_account(self.client)

    def test_account_branch_must_match_client(self):
        """Test an account is opened at its owner's branch"""
        other = self.directory.register_branch(
            Branch(id=self.directory.next_branch_id(), name="Bairro")
        )
        account = Account(account_id=5, client_id=self.client.id, branch_id=other.id)
        with pytest.raises(ValueError):
            self.directory.register_account(account)
        assert self.client.account_id is None

    def test_registration_advances_sequence(self):
        """Test restored ids push the sequence past them"""
        self.directory.register_account(
            Account(account_id=7, client_id=self.client.id, branch_id=self.branch.id)
        )
        assert self.directory.next_account_id() == 8

    def test_unknown_account(self):
        """Test lookup of an unknown account number"""
        assert self.directory.find_account(404) is None
        with pytest.raises(AccountNotFoundError) as exc_info:
            self.directory.require_account(404)

        assert exc_info.value.account_id == 404
        assert "404" in str(exc_info.value)
        # Still a ValueError for callers that catch the broad case
        assert isinstance(exc_info.value, ValueError)

    def test_enumeration_by_branch(self):
        """Test clients and accounts are listed per branch"""
        other = self.directory.register_branch(
            Branch(id=self.directory.next_branch_id(), name="Bairro")
        )
        beto = self.directory.register_client(Client(
            id=self.directory.next_client_id(), name="Beto Souza",
            cpf="222.222.222-22", branch_id=other.id,
        ))
        self._open_account(self.client)
        self._open_account(beto)

        assert [c.name for c in self.directory.clients_of(self.branch.id)] == ["Alice Silva"]
        assert [c.name for c in self.directory.clients_of(other.id)] == ["Beto Souza"]
        assert [a.id for a in self.directory.accounts_of(other.id)] == [2]
        assert [b.full_name for b in self.directory.branches()] == ["001 - Centro", "002 - Bairro"]
