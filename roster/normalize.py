"""Conversion of source-specific records into working list entries."""

from roster import ChurchWindowsRecord, OnRealmRecord, WorkingListEntry

# Marks rows generated by this tool rather than typed in by hand
ADMIN_MARKER = 'auto'

SOURCE_CHURCH_WINDOWS = 'CW'
SOURCE_ONREALM = 'REALM'


def split_city_state(city_state: str) -> tuple[str, str]:
    """Split a Church Windows "CityState" value into (city, state).

    The value is split on its last space. Without a space the whole
    value is taken as the city. Entries with a comma after the city, a
    trailing zip code or a town without state are not recognized.

    Args:
        city_state: Combined value, e.g. "Newark NJ".

    Returns:
        Tuple of (city, state).
    """
    if not city_state:
        return '', ''
    parts = city_state.rsplit(' ', 1)
    if len(parts) == 1:
        # Probably a town with the state omitted
        return parts[0], ''
    return parts[0].strip(), parts[1].strip()


def church_windows_to_entry(record: ChurchWindowsRecord) -> WorkingListEntry:
    """Convert a Church Windows record into a working list entry.

    Note that ``phone_number`` comes from the home phone here, while OnRealm
    entries use the primary phone.
    """
    city, state = split_city_state(record.city_state)
    return WorkingListEntry(
        admin=ADMIN_MARKER,
        last_name=record.last_name,
        first_name=record.first_name,
        member_status=record.status,
        membership_date=record.membership_date,
        last_updated=record.last_update,
        phone_number=record.home_phone,
        cell_phone=record.cell_phone,
        street=record.address1,
        street2=record.address2,
        city=city,
        state=state,
        zip=record.zip,
        email=record.email,
        source=SOURCE_CHURCH_WINDOWS,
    )


def onrealm_to_entry(record: OnRealmRecord) -> WorkingListEntry:
    """Convert an OnRealm record into a working list entry."""
    # first_name_2/last_name_2, home_phone, membership_date and the
    # alternate email columns are not carried over.
    return WorkingListEntry(
        admin=ADMIN_MARKER,
        last_name=record.last_name,
        first_name=record.first_name,
        family_position=record.family_position,
        member_status=record.member_status,
        phone_number=record.primary_phone,
        cell_phone=record.mobile_phone,
        street=record.address_line1,
        street2=record.address_line2,
        city=record.city,
        state=record.state,
        zip=record.postal_code,
        email=record.primary_email,
        source=SOURCE_ONREALM,
    )
