"""Application service for user registration, profile updates and deletion."""

import logging
from typing import Iterable, List

from sqlalchemy import true
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.user_dto import (
    AddressTypeDTO,
    LoginResult,
    RegisteredUserDTO,
    RegisterUserRequest,
    StateDTO,
    UpdateUserRequest,
)
from core.application.interfaces import IClock, IHashFunction
from core.data.models import (
    AddressModel,
    BusinessEntityAddressModel,
    BusinessEntityModel,
    EmailAddressModel,
    PasswordModel,
    PersonModel,
    ShoppingCartItemModel,
)
from core.data.query import project_address_type, project_state
from core.data.uow import UnitOfWork, create_uow
from core.domain.exceptions import (
    RegistrationFailedError,
    UserDeletionFailedError,
    UserNotFoundError,
    UserUpdateFailedError,
)


logger = logging.getLogger(__name__)

_PERSON_FIELDS = ("title", "first_name", "middle_name", "last_name", "email_promotion")
_ADDRESS_FIELDS = ("address_line1", "address_line2", "city", "state_province_id", "postal_code")


def _apply_present(target: object, request: UpdateUserRequest, fields: Iterable[str]) -> bool:
    """Copy every non-None request field onto target. Returns True if any was copied."""
    changed = False
    for name in fields:
        value = getattr(request, name)
        if value is not None:
            setattr(target, name, value)
            changed = True
    return changed


class UserApplicationService:
    """
    Application service for the user aggregate.

    Every write workflow runs in one Unit of Work transaction and ends either
    committed or rolled back; a rolled back workflow re-raises as its own
    TransactionFailureError subclass with the root cause chained.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        hash_function: IHashFunction,
        clock: IClock,
    ) -> None:
        """Initialize user application service.

        Args:
            session_factory: SQLAlchemy async session factory
            hash_function: Password hash/salt provider
            clock: Timestamp source
        """
        self._session_factory = session_factory
        self._hash_function = hash_function
        self._clock = clock

    async def register_user(self, request: RegisterUserRequest) -> RegisteredUserDTO:
        """Create BusinessEntity, Person, EmailAddress, Password, Address and their join row.

        Args:
            request: RegisterUserRequest DTO

        Returns:
            RegisteredUserDTO with the new business entity ID

        Raises:
            RegistrationFailedError: If any step fails (nothing is persisted)
        """
        logger.info(f"Registering user: {request.email_address}")

        async with create_uow(self._session_factory) as uow:
            await uow.begin_transaction()
            try:
                now = self._clock.now()

                # 1. Root identity row; its generated ID keys every other row
                business_entity = await uow.business_entities.add(
                    BusinessEntityModel(modified_date=now)
                )
                await uow.save_changes()
                business_entity_id = business_entity.business_entity_id

                # 2. Person + EmailAddress
                await uow.persons.add(
                    PersonModel(
                        business_entity_id=business_entity_id,
                        person_type=request.person_type,
                        name_style=request.name_style,
                        title=request.title,
                        first_name=request.first_name,
                        middle_name=request.middle_name,
                        last_name=request.last_name,
                        email_promotion=request.email_promotion,
                        modified_date=now,
                    )
                )
                await uow.email_addresses.add(
                    EmailAddressModel(
                        business_entity_id=business_entity_id,
                        email_address=request.email_address,
                        modified_date=now,
                    )
                )
                await uow.save_changes()

                # 3. Credential
                salt = self._hash_function.salt()
                await uow.passwords.add(
                    PasswordModel(
                        business_entity_id=business_entity_id,
                        password_hash=self._hash_function.hash(request.password, salt),
                        password_salt=salt,
                        modified_date=now,
                    )
                )

                # 4. Address, flushed for its ID
                address = await uow.addresses.add(
                    AddressModel(
                        address_line1=request.address_line1,
                        address_line2=request.address_line2,
                        city=request.city,
                        state_province_id=request.state_province_id,
                        postal_code=request.postal_code,
                        modified_date=now,
                    )
                )
                await uow.save_changes()

                # 5. Join row
                await uow.business_entity_addresses.add(
                    BusinessEntityAddressModel(
                        business_entity_id=business_entity_id,
                        address_id=address.address_id,
                        address_type_id=request.address_type_id,
                        modified_date=now,
                    )
                )
                await uow.save_changes()

                await uow.commit()
            except Exception as e:
                logger.error(f"❌ Registration failed for {request.email_address}: {e}", exc_info=True)
                await uow.rollback()
                raise RegistrationFailedError(
                    "An error occurred while registering the user. See cause for details.",
                    cause=e,
                ) from e

        logger.info(f"✅ Registered user {business_entity_id}")
        return RegisteredUserDTO(business_entity_id=business_entity_id)

    async def update_user(self, business_entity_id: int, request: UpdateUserRequest) -> None:
        """Apply a partial update; fields left as None are not touched.

        Args:
            business_entity_id: User to update
            request: UpdateUserRequest DTO

        Raises:
            UserNotFoundError: If the user does not exist (nothing was written)
            UserUpdateFailedError: If any write step fails (rolled back)
        """
        logger.info(f"Updating user: {business_entity_id}")

        async with create_uow(self._session_factory) as uow:
            await self._require_user(uow, business_entity_id)

            await uow.begin_transaction()
            try:
                now = self._clock.now()

                person = await uow.persons.find_single(
                    PersonModel.business_entity_id == business_entity_id
                )
                if person is not None and _apply_present(person, request, _PERSON_FIELDS):
                    person.modified_date = now
                    await uow.persons.update(person)

                if request.email_address is not None:
                    email = await uow.email_addresses.find_single(
                        EmailAddressModel.business_entity_id == business_entity_id
                    )
                    if email is not None:
                        email.email_address = request.email_address
                        email.modified_date = now
                        await uow.email_addresses.update(email)

                if request.password:
                    password = await uow.passwords.find_single(
                        PasswordModel.business_entity_id == business_entity_id
                    )
                    if password is not None:
                        salt = self._hash_function.salt()
                        password.password_salt = salt
                        password.password_hash = self._hash_function.hash(request.password, salt)
                        password.modified_date = now
                        await uow.passwords.update(password)

                link = await uow.business_entity_addresses.find_single(
                    BusinessEntityAddressModel.business_entity_id == business_entity_id
                )
                if link is not None:
                    address = await uow.addresses.find_single(
                        AddressModel.address_id == link.address_id
                    )
                    if address is not None and _apply_present(address, request, _ADDRESS_FIELDS):
                        address.modified_date = now
                        await uow.addresses.update(address)

                    if request.address_type_id is not None:
                        link.address_type_id = request.address_type_id
                        link.modified_date = now
                        await uow.business_entity_addresses.update(link)

                await uow.save_changes()
                await uow.commit()
            except Exception as e:
                logger.error(f"❌ Update failed for user {business_entity_id}: {e}", exc_info=True)
                await uow.rollback()
                raise UserUpdateFailedError(
                    "An error occurred while updating the user. See cause for details.",
                    cause=e,
                ) from e

        logger.info(f"✅ Updated user {business_entity_id}")

    async def delete_user(self, business_entity_id: int) -> None:
        """Delete the whole user aggregate, dependents first, BusinessEntity last.

        Order: EmailAddress, Password, BusinessEntityAddress (then its
        orphaned Address), Person, cart lines, BusinessEntity.

        Raises:
            UserNotFoundError: If the user does not exist (nothing was written)
            UserDeletionFailedError: If any delete fails (rolled back)
        """
        logger.info(f"Deleting user: {business_entity_id}")

        async with create_uow(self._session_factory) as uow:
            business_entity = await self._require_user(uow, business_entity_id)

            await uow.begin_transaction()
            try:
                for email in await uow.email_addresses.find(
                    EmailAddressModel.business_entity_id == business_entity_id
                ):
                    await uow.email_addresses.remove(email)

                password = await uow.passwords.find_single(
                    PasswordModel.business_entity_id == business_entity_id
                )
                if password is not None:
                    await uow.passwords.remove(password)

                for link in await uow.business_entity_addresses.find(
                    BusinessEntityAddressModel.business_entity_id == business_entity_id
                ):
                    address_id = link.address_id
                    # Join row first, then the address it pointed to
                    await uow.business_entity_addresses.remove(link)
                    await self._remove_orphaned_address(uow, address_id)

                person = await uow.persons.find_single(
                    PersonModel.business_entity_id == business_entity_id
                )
                if person is not None:
                    await uow.persons.remove(person)

                for item in await uow.shopping_cart_items.find(
                    ShoppingCartItemModel.business_entity_id == business_entity_id
                ):
                    await uow.shopping_cart_items.remove(item)

                await uow.business_entities.remove(business_entity)

                await uow.save_changes()
                await uow.commit()
            except Exception as e:
                logger.error(f"❌ Deletion failed for user {business_entity_id}: {e}", exc_info=True)
                await uow.rollback()
                raise UserDeletionFailedError(
                    "An error occurred while deleting the user. See cause for details.",
                    cause=e,
                ) from e

        logger.info(f"✅ Deleted user {business_entity_id}")

    async def authenticate(self, email: str, password: str) -> LoginResult:
        """Check credentials.

        Args:
            email: Login email
            password: Plain text password

        Returns:
            LoginResult (token issuance is left to the caller)
        """
        async with create_uow(self._session_factory) as uow:
            email_record = await uow.email_addresses.find_single(
                EmailAddressModel.email_address == email
            )
            if email_record is None:
                return LoginResult(
                    is_successful=False, message="User not found with the provided email."
                )

            business_entity_id = email_record.business_entity_id
            credential = await uow.passwords.find_single(
                PasswordModel.business_entity_id == business_entity_id
            )
            if credential is None:
                return LoginResult(
                    is_successful=False, message="Password record not found for the user."
                )

        hashed = self._hash_function.hash(password, credential.password_salt)
        if hashed != credential.password_hash:
            return LoginResult(is_successful=False, message="Incorrect password.")

        return LoginResult(
            is_successful=True,
            message="Login successful.",
            business_entity_id=business_entity_id,
        )

    async def list_states(self) -> List[StateDTO]:
        """List all states/provinces for address dropdowns."""
        async with create_uow(self._session_factory) as uow:
            return await uow.state_provinces.find(true(), projection=project_state)

    async def list_address_types(self) -> List[AddressTypeDTO]:
        """List all address types for address dropdowns."""
        async with create_uow(self._session_factory) as uow:
            return await uow.address_types.find(true(), projection=project_address_type)

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    async def _require_user(self, uow: UnitOfWork, business_entity_id: int) -> BusinessEntityModel:
        business_entity = await uow.business_entities.find_single(
            BusinessEntityModel.business_entity_id == business_entity_id
        )
        if business_entity is None:
            logger.info(f"User not found: {business_entity_id}")
            raise UserNotFoundError(business_entity_id)
        return business_entity

    async def _remove_orphaned_address(self, uow: UnitOfWork, address_id: int) -> None:
        still_linked = await uow.business_entity_addresses.find(
            BusinessEntityAddressModel.address_id == address_id
        )
        if still_linked:
            return

        address = await uow.addresses.find_single(AddressModel.address_id == address_id)
        if address is not None:
            await uow.addresses.remove(address)
