"""Core module for church-roster-merge."""

from dataclasses import dataclass, field


class RosterError(Exception):
    """Base class for all errors raised while building the working list."""


class FileError(RosterError):
    """An input file does not exist or cannot be opened."""


class ParseError(RosterError):
    """A row does not conform to the expected export schema."""


class PatternError(RosterError):
    """The exclusion expression does not compile."""


@dataclass
class ChurchWindowsRecord:
    """A row from a Church Windows export, bound by header name."""

    title: str
    first_name: str
    last_name: str
    mailing_label: str
    address_block: str
    address1: str
    address2: str
    city_state: str     # "City ST", split during normalization
    zip: str
    membership_date: str
    email: str
    home_phone: str
    cell_phone: str
    last_update: str
    status: str
    birth_date: str


@dataclass
class OnRealmRecord:
    """A row from an OnRealm export, bound by column position."""

    vlookup_name: str
    vlookup_email: str
    vlookup_phone: str
    vlookup_mobile: str
    individual_id: str
    label: str
    first_name: str
    current_pledge: str
    last_name: str
    primary_email: str
    family_id: str
    primary_phone: str
    title: str
    first_name_2: str
    last_name_2: str
    individual_status: str
    address_line1: str
    address_line2: str
    city: str
    postal_code: str
    state: str
    membership_date: str
    primary_email_address: str
    alternate_email: str
    home_phone: str
    mobile_phone: str
    date_of_birth: str
    marital_status: str
    family_position: str
    pronouns: str
    member_status: str


@dataclass
class WorkingListEntry:
    """One row of the merged working list.

    Field order is the output column order. Every field is text and
    defaults to the empty string.
    """

    admin: str = ''
    last_name: str = ''
    first_name: str = ''
    member_status: str = ''
    family_position: str = ''
    has_pledge: str = ''
    spouse_first_name: str = ''
    email: str = ''
    phone_number: str = ''
    cell_phone: str = ''
    street: str = ''
    street2: str = ''
    city: str = ''
    state: str = ''
    zip: str = ''
    source: str = ''
    last_updated: str = ''
    notes: str = ''
    referred_by: str = ''
    membership_date: str = ''
    time_away: str = ''
    pastoral: str = ''
    virtual: str = ''
    in_person: str = ''
    re_family: str = ''
    constant_contact: str = ''
    social_justice: str = ''
    operating_budget: str = ''
    capital_campaign: str = ''

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for deduplication: (last name, first name)."""
        return (self.last_name, self.first_name)


@dataclass
class MergeResult:
    """Outcome of merging both exports into one working list."""

    entries: list[WorkingListEntry]
    church_windows_count: int
    onrealm_count: int
    replaced: list[tuple[str, str]] = field(default_factory=list)
    excluded: list[tuple[str, str]] = field(default_factory=list)
