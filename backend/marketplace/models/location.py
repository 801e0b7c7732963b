from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from marketplace.core.database import Base


class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    # ISO 3166-1 alpha-2
    iso_code = Column(String(2), unique=True, nullable=True)

    states = relationship("State", back_populates="country")


class State(Base):
    __tablename__ = "states"

    id = Column(Integer, primary_key=True, index=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True)
    name = Column(String(100), nullable=False)

    country = relationship("Country", back_populates="states")
    cities = relationship("City", back_populates="state")


class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, index=True)
    state_id = Column(Integer, ForeignKey("states.id"), nullable=True)
    name = Column(String(100), nullable=False)

    state = relationship("State", back_populates="cities")
