"""Fixed professional diving passages used to build the similarity index."""

from divetutor.models.passage import Passage, PassageMetadata

PROFESSIONAL_PASSAGES: tuple[Passage, ...] = (
    Passage(
        id="ndt-fundamentals",
        title="Non-Destructive Testing (NDT) Fundamentals",
        text="""Non-Destructive Testing (NDT) Fundamentals

NDT is a critical component of underwater inspection operations in commercial diving. This discipline focuses on evaluating the integrity of underwater structures without causing damage.

Key NDT Methods:
- Visual Inspection: Systematic examination of surfaces for defects
- Ultrasonic Testing: Using sound waves to detect internal flaws
- Magnetic Particle Testing: Detecting surface and near-surface cracks
- Dye Penetrant Testing: Identifying surface-breaking defects
- Eddy Current Testing: Detecting surface and subsurface flaws

Corrosion Assessment:
- Cathodic protection potential surveys using a reference electrode
- Anode depletion estimates and replacement planning
- Galvanic corrosion at dissimilar metal joints
- Ultrasonic wall thickness gauging against design thickness

Safety Protocols:
- Pre-dive safety briefings
- Equipment calibration and verification
- Emergency procedures and communication protocols
- Documentation standards for regulatory compliance

Industry Standards:
- IMCA guidelines for underwater inspection
- ADCI standards for commercial diving operations
- OSHA regulations for workplace safety
- ASTM standards for NDT procedures

Career Development:
- NDT Level I, II, and III certifications
- Specialized training in advanced NDT methods
- Continuing education requirements
- Professional development opportunities""",
        metadata=PassageMetadata(
            discipline="NDT",
            category="inspection",
            difficulty="intermediate",
            certification_ref="NDT Level I/II",
            standards_refs=("IMCA", "ADCI", "OSHA", "ASTM"),
        ),
    ),
    Passage(
        id="lst-training",
        title="Life Support Technician (LST) Training",
        text="""Life Support Technician (LST) Training

LSTs are responsible for maintaining life support systems and ensuring diver safety during commercial diving operations.

Core Responsibilities:
- Life support system operation and maintenance
- Gas mixing and analysis
- Emergency response procedures
- Equipment troubleshooting and repair
- Safety monitoring and documentation

Technical Skills:
- Hyperbaric chamber operation
- Gas analysis and mixing procedures
- Emergency life support protocols
- Equipment maintenance and calibration
- Safety system monitoring

Safety Protocols:
- Emergency response procedures
- Gas contamination prevention
- Equipment failure protocols
- Communication systems maintenance
- Documentation and reporting

Industry Standards:
- IMCA guidelines for life support operations
- ADCI standards for commercial diving
- OSHA regulations for workplace safety
- Professional certification requirements

Career Path:
- LST certification programs
- Advanced life support training
- Supervisor certification opportunities
- Continuing education requirements""",
        metadata=PassageMetadata(
            discipline="LST",
            category="life-support",
            difficulty="intermediate",
            certification_ref="LST",
            standards_refs=("IMCA", "ADCI", "OSHA"),
        ),
    ),
    Passage(
        id="alst-training",
        title="Advanced Life Support Technician (ALST) Training",
        text="""Advanced Life Support Technician (ALST) Training

ALSTs provide advanced life support services for complex commercial diving operations, including saturation diving and deep water work.

Advanced Responsibilities:
- Saturation diving life support
- Deep water operations support
- Complex gas mixing procedures
- Advanced emergency response
- Specialized equipment operation

Technical Expertise:
- Saturation diving systems
- Advanced gas analysis
- Hyperbaric medicine principles
- Emergency decompression procedures
- Complex life support systems

Safety Protocols:
- Saturation diving safety procedures
- Emergency decompression protocols
- Gas contamination prevention
- Equipment redundancy systems
- Advanced emergency response

Industry Standards:
- IMCA guidelines for saturation diving
- ADCI standards for advanced operations
- OSHA regulations for workplace safety
- Professional certification requirements

Career Advancement:
- ALST certification programs
- Saturation diving specialization
- Supervisor certification opportunities
- Advanced technical training""",
        metadata=PassageMetadata(
            discipline="ALST",
            category="advanced-life-support",
            difficulty="advanced",
            certification_ref="ALST",
            standards_refs=("IMCA", "ADCI", "OSHA"),
        ),
    ),
    Passage(
        id="dmt-training",
        title="Dive Medical Technician (DMT) Training",
        text="""Dive Medical Technician (DMT) Training

DMTs provide essential medical support for commercial diving operations, specializing in diving medicine and emergency response.

Medical Responsibilities:
- Diving medical examinations
- Emergency medical response
- Hyperbaric medicine applications
- Medical equipment operation
- Health and safety monitoring

Medical Knowledge:
- Diving physiology and medicine
- Decompression sickness treatment
- Hyperbaric oxygen therapy
- Emergency medical procedures
- Medical equipment maintenance

Safety Protocols:
- Medical emergency response
- Hyperbaric treatment procedures
- Medical equipment protocols
- Health monitoring procedures
- Documentation and reporting

Industry Standards:
- IMCA guidelines for diving medicine
- ADCI standards for medical support
- OSHA regulations for workplace safety
- Professional medical certification

Career Development:
- DMT certification programs
- Advanced medical training
- Hyperbaric medicine specialization
- Continuing medical education""",
        metadata=PassageMetadata(
            discipline="DMT",
            category="diving-medicine",
            difficulty="advanced",
            certification_ref="DMT",
            standards_refs=("IMCA", "ADCI", "OSHA"),
        ),
    ),
    Passage(
        id="commercial-supervisor-training",
        title="Commercial Dive Supervisor Training",
        text="""Commercial Dive Supervisor Training

Commercial Dive Supervisors oversee all aspects of commercial diving operations, ensuring safety, efficiency, and regulatory compliance.

Supervisory Responsibilities:
- Operation planning and coordination
- Safety oversight and compliance
- Team management and leadership
- Regulatory compliance monitoring
- Emergency response coordination

Leadership Skills:
- Team management and communication
- Safety leadership and culture
- Operational planning and execution
- Risk assessment and mitigation
- Regulatory compliance management

Safety Protocols:
- Comprehensive safety oversight
- Emergency response coordination
- Regulatory compliance monitoring
- Safety culture development
- Incident investigation and reporting

Industry Standards:
- IMCA guidelines for dive supervision
- ADCI standards for commercial operations
- OSHA regulations for workplace safety
- Professional certification requirements

Career Advancement:
- Commercial Dive Supervisor certification
- Advanced supervisory training
- Management and leadership development
- Continuing education requirements""",
        metadata=PassageMetadata(
            discipline="Commercial Dive Supervisor",
            category="supervision",
            difficulty="expert",
            certification_ref="Commercial Dive Supervisor",
            standards_refs=("IMCA", "ADCI", "OSHA"),
        ),
    ),
)


def get_passages() -> list[Passage]:
    """Return all professional passages in a fixed order."""
    return list(PROFESSIONAL_PASSAGES)


def passages_for_discipline(discipline: str) -> list[Passage]:
    """Return the passages tagged with exactly this discipline."""
    return [p for p in PROFESSIONAL_PASSAGES if p.discipline == discipline]
