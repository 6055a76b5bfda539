"""
Peer Learning Facilitator
=========================

Study groups, mentor matching and collaborative sessions for peer-to-peer
Bitcoin learning.

Arguments and response fields use camelCase names (`availableLearners`,
`groupSize`, ...) because that is what the calling front end sends. Every
response is wrapped as `{"success": True, "data": {...}}`.

Group formation:
    ceil(len(learners) / groupSize) groups, filled in order,
    ids `group_{groupType}_{n}`

Mentor matching:
    min(len(mentors), len(mentees)) pairs, mentor i with mentee i
"""

import math
from dataclasses import asdict, dataclass, field

from src.agents.base import BaseAgent

FACILITATORS = {
    "peer-led": "rotating-peer",
    "rotating-leader": "rotating-member",
    "expert-facilitated": "assigned-expert",
    "self-organizing": "group-consensus",
}

MENTORSHIP_GOALS = {
    "formal-mentorship": ["Comprehensive Bitcoin understanding", "Practical skill development", "Confidence building"],
    "peer-mentoring": ["Knowledge sharing", "Mutual support", "Collaborative learning"],
    "expert-guidance": ["Advanced concept mastery", "Problem-solving skills", "Best practices"],
    "collaborative-learning": ["Shared discovery", "Joint projects", "Community contribution"],
}

MENTORSHIP_SCHEDULES = {
    "casual": ["Monthly check-ins", "Ad-hoc support"],
    "regular": ["Bi-weekly sessions", "Regular progress reviews"],
    "intensive": ["Weekly meetings", "Daily communication available"],
    "long-term": ["Regular sessions over 6+ months", "Structured progression"],
}

ACTIVITY_TYPES = {
    "study-session": "discussion",
    "peer-teaching": "presentation",
    "group-project": "collaboration",
    "discussion-forum": "discussion",
    "problem-solving": "exercise",
    "knowledge-sharing": "presentation",
}

TEACHING_DURATIONS = {
    "presentation": "30-45 minutes",
    "workshop": "60-90 minutes",
    "tutorial": "20-30 minutes",
    "demonstration": "15-25 minutes",
    "discussion-lead": "45-60 minutes",
    "case-study": "30-45 minutes",
}

INTERVENTION_TIMELINES = {
    "low": "Implement over 2-4 weeks",
    "medium": "Implement within 1-2 weeks",
    "high": "Implement within 2-3 days",
    "critical": "Implement immediately",
}

NEXT_STAGE = {
    "learner": "peer-mentor",
    "peer-mentor": "expert-mentor",
    "expert-mentor": "community-leader",
}


@dataclass
class LearnerProfile:
    learnerId: str
    skillLevel: str = "beginner"
    interests: list[str] = field(default_factory=list)
    learningStyle: str = "mixed"
    communicationPreference: str = "verbal"
    availabilitySchedule: list[str] = field(default_factory=list)
    mentorshipRole: str = "learner"
    contributionHistory: list[str] = field(default_factory=list)


def skill_level_from_scores(assessments: list[dict]) -> str:
    """Average assessment score: >=90 expert, >=75 advanced, >=60 intermediate."""
    if not assessments:
        return "beginner"

    average = sum(a.get("score", 0) for a in assessments) / len(assessments)
    if average >= 90:
        return "expert"
    if average >= 75:
        return "advanced"
    if average >= 60:
        return "intermediate"
    return "beginner"


def mentorship_role_for(skill_level: str) -> str:
    if skill_level == "expert":
        return "expert-mentor"
    if skill_level == "advanced":
        return "peer-mentor"
    return "learner"


def conflict_level(indicators: list[str]) -> str:
    if not indicators:
        return "none"
    if len(indicators) <= 2:
        return "low"
    if len(indicators) <= 4:
        return "moderate"
    return "high"


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0


class PeerLearningFacilitator(BaseAgent):
    """Peer-to-peer learning: groups, mentorship, sessions and assessment."""

    name = "PeerLearningFacilitator"

    tools = [
        {
            "name": "create_learner_profiles",
            "description": "Build a learner profile with matching preferences and contribution potential",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "learnerData": {
                        "type": "object",
                        "properties": {
                            "basicInfo": {"type": "object"},
                            "bitcoinKnowledge": {"type": "object"},
                            "learningPreferences": {"type": "object"},
                            "availability": {"type": "object"}
                        }
                    },
                    "assessmentResults": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "area": {"type": "string"},
                                "score": {"type": "number"}
                            }
                        }
                    }
                },
                "required": ["learnerData"]
            }
        },
        {
            "name": "form_study_groups",
            "description": "Form study groups from available learners",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "groupingCriteria": {
                        "type": "object",
                        "properties": {
                            "skillLevel": {"type": "string", "enum": ["mixed-levels", "similar-levels", "beginner-focus", "advanced-focus"]},
                            "interests": {"type": "array", "items": {"type": "string"}},
                            "groupSize": {"type": "number", "minimum": 2, "maximum": 12},
                            "duration": {"type": "string"}
                        }
                    },
                    "availableLearners": {"type": "array", "items": {"type": "string"}},
                    "groupType": {
                        "type": "string",
                        "enum": ["study-circle", "project-team", "discussion-group", "practice-group", "review-group"]
                    },
                    "facilitationStyle": {"type": "string", "enum": list(FACILITATORS)}
                },
                "required": ["groupingCriteria", "availableLearners", "groupType"]
            }
        },
        {
            "name": "match_mentors_mentees",
            "description": "Pair mentors with mentees",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "matchingCriteria": {
                        "type": "object",
                        "properties": {
                            "topicAlignment": {"type": "array", "items": {"type": "string"}},
                            "experienceGap": {"type": "string", "enum": ["minimal", "moderate", "significant"]}
                        }
                    },
                    "availableMentors": {"type": "array", "items": {"type": "string"}},
                    "seekingMentees": {"type": "array", "items": {"type": "string"}},
                    "relationshipType": {"type": "string", "enum": list(MENTORSHIP_GOALS)},
                    "commitmentLevel": {"type": "string", "enum": list(MENTORSHIP_SCHEDULES)}
                },
                "required": ["matchingCriteria", "availableMentors", "seekingMentees"]
            }
        },
        {
            "name": "design_collaborative_sessions",
            "description": "Design a collaborative learning session with one activity per objective",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "sessionType": {"type": "string", "enum": list(ACTIVITY_TYPES)},
                    "participants": {"type": "array", "items": {"type": "string"}},
                    "learningObjectives": {"type": "array", "items": {"type": "string"}},
                    "bitcoinTopic": {"type": "string"},
                    "duration": {"type": "string"},
                    "facilitationNeeds": {"type": "object"}
                },
                "required": ["sessionType", "participants", "learningObjectives", "bitcoinTopic"]
            }
        },
        {
            "name": "facilitate_peer_teaching",
            "description": "Plan a peer teaching session",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "teachingFormat": {"type": "string", "enum": list(TEACHING_DURATIONS)},
                    "teacher": {"type": "string"},
                    "audience": {"type": "array", "items": {"type": "string"}},
                    "topic": {"type": "string"},
                    "preparation": {"type": "object"},
                    "assessmentMethod": {
                        "type": "string",
                        "enum": ["peer-feedback", "self-reflection", "knowledge-check", "practical-application", "none"]
                    }
                },
                "required": ["teachingFormat", "teacher", "audience", "topic"]
            }
        },
        {
            "name": "manage_group_dynamics",
            "description": "Analyze group dynamics and plan an intervention",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "groupId": {"type": "string"},
                    "dynamicsAssessment": {
                        "type": "object",
                        "properties": {
                            "participationLevels": {"type": "array", "items": {"type": "number"}},
                            "communicationQuality": {"type": "string"},
                            "conflictIndicators": {"type": "array", "items": {"type": "string"}},
                            "engagement": {"type": "string"},
                            "satisfaction": {"type": "array", "items": {"type": "number"}}
                        }
                    },
                    "interventionType": {
                        "type": "string",
                        "enum": ["facilitation-adjustment", "conflict-resolution", "engagement-boost", "restructuring", "coaching"]
                    },
                    "urgencyLevel": {"type": "string", "enum": list(INTERVENTION_TIMELINES)}
                },
                "required": ["groupId", "dynamicsAssessment"]
            }
        },
        {
            "name": "track_peer_learning_progress",
            "description": "Summarize peer learning progress over a period",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "trackingScope": {
                        "type": "string",
                        "enum": ["individual-learner", "study-group", "mentorship-pair", "entire-community"]
                    },
                    "trackingPeriod": {"type": "string"},
                    "progressMetrics": {"type": "array", "items": {"type": "string"}},
                    "dataPoints": {"type": "array", "items": {"type": "object"}},
                    "analysisDepth": {"type": "string", "enum": ["summary", "detailed", "comprehensive"]}
                },
                "required": ["trackingScope", "progressMetrics"]
            }
        },
        {
            "name": "optimize_peer_interactions",
            "description": "Plan improvements to peer interactions",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "interactionData": {"type": "array", "items": {"type": "object"}},
                    "optimizationGoals": {"type": "array", "items": {"type": "string"}},
                    "interventionOptions": {"type": "array", "items": {"type": "string"}},
                    "constraints": {"type": "array", "items": {"type": "string"}}
                },
                "required": ["interactionData", "optimizationGoals"]
            }
        },
        {
            "name": "create_peer_assessment_systems",
            "description": "Design a peer assessment system",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "assessmentType": {
                        "type": "string",
                        "enum": ["peer-review", "mutual-feedback", "group-evaluation", "skill-validation", "knowledge-check"]
                    },
                    "assessmentScope": {"type": "array", "items": {"type": "string"}},
                    "feedbackStructure": {"type": "object"},
                    "qualityAssurance": {"type": "object"},
                    "integrationWithLearning": {"type": "boolean"}
                },
                "required": ["assessmentType", "assessmentScope", "feedbackStructure"]
            }
        },
    ]

    def _handlers(self) -> dict:
        return {
            "create_learner_profiles": self.create_learner_profiles,
            "form_study_groups": self.form_study_groups,
            "match_mentors_mentees": self.match_mentors_mentees,
            "design_collaborative_sessions": self.design_collaborative_sessions,
            "facilitate_peer_teaching": self.facilitate_peer_teaching,
            "manage_group_dynamics": self.manage_group_dynamics,
            "track_peer_learning_progress": self.track_peer_learning_progress,
            "optimize_peer_interactions": self.optimize_peer_interactions,
            "create_peer_assessment_systems": self.create_peer_assessment_systems,
        }

    # ==========================================================================
    # Profiles, groups and mentorship
    # ==========================================================================

    def create_learner_profiles(self, args: dict) -> dict:
        data = args.get("learnerData") or {}
        assessments = args.get("assessmentResults") or []

        basic = data.get("basicInfo") or {}
        knowledge = data.get("bitcoinKnowledge") or {}
        prefs = data.get("learningPreferences") or {}
        availability = data.get("availability") or {}

        skill = skill_level_from_scores(assessments)
        role = mentorship_role_for(skill)
        profile = LearnerProfile(
            learnerId=basic.get("learnerId", ""),
            skillLevel=skill,
            interests=knowledge.get("specificAreas") or [],
            learningStyle=prefs.get("style") or "mixed",
            communicationPreference=prefs.get("communication") or "verbal",
            availabilitySchedule=availability.get("schedule") or [],
            mentorshipRole=role,
        )

        self.logger.info(f"Created learner profile {profile.learnerId} ({skill}, {role})")

        grouping = []
        if skill == "beginner":
            grouping.append("Mixed-level groups for diverse perspectives")
        if role == "expert-mentor":
            grouping.append("Group leadership opportunities")
        if profile.communicationPreference == "visual":
            grouping.append("Groups with visual learning focus")

        opportunities = []
        if skill != "beginner":
            opportunities.append("peer teaching")
        if role == "expert-mentor":
            opportunities.append("group facilitation")
        opportunities.append("knowledge sharing")

        return {
            "success": True,
            "data": {
                "profile": asdict(profile),
                "matchingPreferences": {
                    "groupSizePreference": prefs.get("groupSize"),
                    "pacePreference": prefs.get("pace"),
                    "communicationStyle": prefs.get("communication"),
                    "learningStyle": prefs.get("style"),
                    "timezone": availability.get("timezone"),
                    "commitmentLevel": availability.get("commitment"),
                },
                "contributionPotential": {
                    "teachingAbility": {"expert": 0.9, "advanced": 0.7}.get(skill, 0.3),
                    "leadershipSkills": 0.8 if role == "expert-mentor" else 0.4,
                    "collaborationStrength": 0.8 if "collaborative" in profile.communicationPreference else 0.6,
                    "knowledgeDepth": {"expert": 0.9, "advanced": 0.7}.get(skill, 0.4),
                    "mentorshipReadiness": {"expert-mentor": 1.0, "peer-mentor": 0.6}.get(role, 0.2),
                },
                "groupingRecommendations": grouping,
                "mentorshipReadiness": {
                    "readyToMentor": skill in ("advanced", "expert"),
                    "needsMentoring": skill == "beginner",
                    "peerMentoringCapable": skill in ("intermediate", "advanced"),
                    "specialtyAreas": profile.interests,
                },
                "learningPath": {
                    "initialRole": role,
                    "progressionPath": {
                        "currentStage": role,
                        "nextStage": NEXT_STAGE.get(role, "advanced-learner"),
                    },
                    "contributionOpportunities": opportunities,
                },
                "communicationGuide": {
                    "preferredStyle": profile.communicationPreference,
                    "effectiveApproaches": [
                        f"{profile.communicationPreference} communication",
                        "respectful dialogue",
                        "active listening",
                    ],
                    "potentialChallenges": [
                        "different learning paces",
                        "communication style differences",
                        "scheduling conflicts",
                    ],
                },
            },
        }

    def form_study_groups(self, args: dict) -> dict:
        criteria = args.get("groupingCriteria") or {}
        learners = args.get("availableLearners") or []
        group_type = args.get("groupType", "study-circle")
        style = args.get("facilitationStyle") or "peer-led"

        size = max(1, int(criteria.get("groupSize") or 4))
        interests = criteria.get("interests") or []
        count = math.ceil(len(learners) / size)

        groups = [
            {
                "groupId": f"group_{group_type}_{index + 1}",
                "topic": interests[0] if interests else "General Bitcoin Learning",
                "members": [
                    asdict(LearnerProfile(
                        learnerId=learner,
                        skillLevel="intermediate",
                        interests=["bitcoin-basics"],
                        availabilitySchedule=["weekdays-evening"],
                    ))
                    for learner in learners[index * size:(index + 1) * size]
                ],
                "facilitator": FACILITATORS.get(style, "peer-led"),
                "sessionSchedule": [
                    "Weekly sessions",
                    f"Duration: {criteria.get('duration')}",
                    "Flexible timing based on member availability",
                ],
                "currentPhase": "formation",
                "groupDynamics": "forming",
                "achievements": [],
            }
            for index in range(count)
        ]

        self.logger.info(f"Formed {len(groups)} {group_type} groups from {len(learners)} learners")

        return {
            "success": True,
            "data": {
                "studyGroups": groups,
                "groupFormationRationale": {
                    "groupingStrategy": "Optimal peer learning group formation",
                    "criteriaUsed": criteria,
                },
                "facilitationPlans": [
                    {"groupId": group["groupId"], "facilitationStyle": style} for group in groups
                ],
                "scheduleRecommendations": [
                    {"groupId": group["groupId"], "recommendedFrequency": "Weekly sessions",
                     "optimalDuration": "90 minutes"}
                    for group in groups
                ],
                "successMetrics": {
                    "learningOutcomes": "Knowledge and skill improvements",
                    "engagement": "Participation and contribution levels",
                    "retention": "Group member retention rates",
                },
            },
        }

    def match_mentors_mentees(self, args: dict) -> dict:
        criteria = args.get("matchingCriteria") or {}
        mentors = args.get("availableMentors") or []
        mentees = args.get("seekingMentees") or []
        relationship = args.get("relationshipType") or "peer-mentoring"
        commitment = args.get("commitmentLevel") or "regular"

        topics = criteria.get("topicAlignment") or []
        goals = MENTORSHIP_GOALS.get(relationship, MENTORSHIP_GOALS["peer-mentoring"])

        matches = [
            {
                "matchId": f"match_{index + 1}",
                "mentor": asdict(LearnerProfile(
                    learnerId=mentor,
                    skillLevel="advanced",
                    interests=["bitcoin-education", "mentorship"],
                    learningStyle="practical",
                    communicationPreference="supportive",
                    availabilitySchedule=["flexible"],
                    mentorshipRole="expert-mentor",
                    contributionHistory=["previous-mentoring", "community-contribution"],
                )),
                "mentee": asdict(LearnerProfile(
                    learnerId=mentee,
                    interests=["bitcoin-basics", "practical-application"],
                    learningStyle="guided",
                    communicationPreference="questioning",
                    availabilitySchedule=["regular-commitment"],
                )),
                "topic": topics[0] if topics else "General Bitcoin Knowledge",
                "relationship": relationship,
                "goals": list(goals),
                "schedule": list(MENTORSHIP_SCHEDULES.get(commitment, MENTORSHIP_SCHEDULES["regular"])),
                "progress": "initial",
            }
            for index, (mentor, mentee) in enumerate(zip(mentors, mentees))
        ]

        self.logger.info(f"Matched {len(matches)} mentor pairs ({relationship})")

        return {
            "success": True,
            "data": {
                "matches": matches,
                "matchingRationale": {
                    "matchingAlgorithm": "Compatibility-based mentor-mentee pairing",
                    "criteriaWeighting": criteria,
                },
                "goalSetting": [
                    {
                        "matchId": match["matchId"],
                        "milestones": [
                            {
                                "goal": goal,
                                "milestones": [
                                    f"25% progress on {goal}",
                                    f"50% progress on {goal}",
                                    f"75% progress on {goal}",
                                    f"Complete {goal}",
                                ],
                            }
                            for goal in match["goals"]
                        ],
                    }
                    for match in matches
                ],
                "unmatchedMentees": mentees[len(matches):],
            },
        }

    # ==========================================================================
    # Sessions and teaching
    # ==========================================================================

    def design_collaborative_sessions(self, args: dict) -> dict:
        session_type = args.get("sessionType", "study-session")
        participants = args.get("participants") or []
        objectives = args.get("learningObjectives") or []
        topic = args.get("bitcoinTopic", "Bitcoin")
        duration = args.get("duration") or "60 minutes"

        activities = [
            {
                "activityId": f"activity_{index + 1}",
                "name": f"{topic} {session_type} Activity {index + 1}",
                "type": ACTIVITY_TYPES.get(session_type, "discussion"),
                "duration": "20 minutes",
                "participants": ["all"],
                "objectives": [objective],
                "materials": [f"{topic} resources"],
            }
            for index, objective in enumerate(objectives)
        ]
        session = {
            "sessionId": self.make_id(f"session_{session_type}"),
            "type": session_type,
            "participants": participants,
            "topic": topic,
            "objectives": objectives,
            "activities": activities,
            "duration": duration,
            "outcome": "planned",
        }

        self.logger.info(f"Designed {session_type} session on {topic} with {len(activities)} activities")

        return {
            "success": True,
            "data": {
                "sessionDesign": session,
                "activities": {
                    "openingActivity": "Icebreaker and objective setting",
                    "coreActivities": activities,
                    "closingActivity": "Summary and next steps",
                },
                "materials": {
                    "preparationMaterials": f"{topic} background reading",
                    "sessionResources": "Interactive materials and tools",
                },
                "facilitation": args.get("facilitationNeeds") or {},
            },
        }

    def facilitate_peer_teaching(self, args: dict) -> dict:
        teaching_format = args.get("teachingFormat", "presentation")
        audience = args.get("audience") or []
        topic = args.get("topic", "Bitcoin")
        preparation = args.get("preparation") or {}
        method = args.get("assessmentMethod") or "peer-feedback"

        if len(audience) <= 5:
            interaction = "high-interaction"
        elif len(audience) <= 10:
            interaction = "moderate-interaction"
        else:
            interaction = "structured-interaction"

        prep = {
            "preparationTime": preparation.get("preparationTime") or "2-3 hours",
            "supportNeeded": preparation.get("supportNeeded") or ["content review", "presentation skills"],
            "resources": preparation.get("resources") or [f"{topic} materials", "teaching guides"],
            "practiceOpportunities": preparation.get("practiceOpportunities", True),
        }
        plan = {
            "teachingFormat": teaching_format,
            "teacher": args.get("teacher"),
            "audience": audience,
            "topic": topic,
            "preparation": prep,
            "delivery": {
                "deliveryFormat": teaching_format,
                "duration": TEACHING_DURATIONS.get(teaching_format, "30 minutes"),
                "interactionPoints": ["Opening Q&A", "Mid-session check-in", "Practical application", "Final questions"],
                "materials": [f"{topic} content materials", "Visual aids", "Interactive elements", "Reference materials"],
            },
            "interaction": {"interactionLevel": interaction},
            "assessment": {"assessmentMethod": method},
        }

        self.logger.info(f"Planned {teaching_format} on {topic} for {len(audience)} peers")

        return {
            "success": True,
            "data": {
                "teachingPlan": plan,
                "preparation": {
                    "preparationPhases": ["Content mastery", "Delivery practice", "Material preparation"],
                    "supportProvided": prep["supportNeeded"],
                },
                "reflection": {
                    "prompts": [
                        "What part of the explanation landed best?",
                        "Which question surprised you?",
                        "What would you change next time?",
                    ],
                },
            },
        }

    # ==========================================================================
    # Dynamics, progress and assessment
    # ==========================================================================

    def manage_group_dynamics(self, args: dict) -> dict:
        group_id = args.get("groupId")
        dynamics = args.get("dynamicsAssessment") or {}
        intervention = args.get("interventionType") or "facilitation-adjustment"
        urgency = args.get("urgencyLevel") or "medium"

        levels = dynamics.get("participationLevels") or []
        participation = _mean(levels)
        satisfaction = _mean(dynamics.get("satisfaction") or [])
        conflicts = conflict_level(dynamics.get("conflictIndicators") or [])

        if satisfaction > 7:
            trend = "positive"
        elif satisfaction > 5:
            trend = "neutral"
        else:
            trend = "concerning"

        factors = [dynamics.get("engagement"), dynamics.get("communicationQuality")]
        health_score = sum(1 for factor in factors if factor in ("good", "high")) / len(factors)
        if health_score >= 0.8:
            health = "excellent"
        elif health_score >= 0.6:
            health = "good"
        elif health_score >= 0.4:
            health = "fair"
        else:
            health = "poor"

        balance = "well-balanced" if participation > 70 else "needs-improvement"
        issues = []
        if balance == "needs-improvement":
            issues.append("participation-imbalance")
        if conflicts != "none":
            issues.append("group-conflicts")
        if trend == "concerning":
            issues.append("low-satisfaction")

        self.logger.info(f"Group {group_id} health {health}, issues: {issues}")

        return {
            "success": True,
            "data": {
                "groupId": group_id,
                "dynamicsAnalysis": {
                    "participationAnalysis": {
                        "averageParticipation": participation,
                        "participationRange": f"{min(levels)} - {max(levels)}" if levels else "n/a",
                        "balanceStatus": balance,
                    },
                    "communicationQuality": dynamics.get("communicationQuality"),
                    "conflictLevel": conflicts,
                    "engagementHealth": dynamics.get("engagement"),
                    "satisfactionStatus": {
                        "averageSatisfaction": satisfaction,
                        "satisfactionTrend": trend,
                    },
                    "overallHealth": health,
                },
                "interventionPlan": {
                    "interventionType": intervention,
                    "urgency": urgency,
                    "targetIssues": issues,
                    "resources": [
                        f"{intervention} intervention tools",
                        "Expert facilitator support",
                        "Additional learning materials",
                    ],
                },
                "timeline": {
                    "urgencyLevel": urgency,
                    "timeline": INTERVENTION_TIMELINES.get(urgency),
                },
            },
        }

    def track_peer_learning_progress(self, args: dict) -> dict:
        metrics = args.get("progressMetrics") or []
        data_points = args.get("dataPoints") or []

        by_metric: dict[str, list[float]] = {}
        for point in data_points:
            by_metric.setdefault(point.get("metric"), []).append(point.get("value", 0))

        self.logger.info(f"Tracking {len(metrics)} progress metrics over {len(data_points)} data points")

        return {
            "success": True,
            "data": {
                "progressAnalysis": {
                    "scope": args.get("trackingScope"),
                    "period": args.get("trackingPeriod") or "4 weeks",
                    "metrics": metrics,
                    "analysisDepth": args.get("analysisDepth") or "detailed",
                    "overallTrend": "positive-growth",
                    "keyInsights": [f"{metric} showing positive trend" for metric in metrics],
                    "metricAverages": {metric: _mean(values) for metric, values in by_metric.items()},
                },
                "achievements": ["Improved collaboration skills", "Increased Bitcoin knowledge", "Enhanced teaching ability"],
                "challengeAreas": ["Technical concept understanding", "Time management", "Confidence in peer teaching"],
                "recommendations": [
                    "Continue current approach",
                    "Increase peer interaction frequency",
                    "Add more practical applications",
                ],
            },
        }

    def optimize_peer_interactions(self, args: dict) -> dict:
        goals = args.get("optimizationGoals") or []
        selected = (args.get("interventionOptions") or [])[:3]

        self.logger.info(f"Optimizing peer interactions for {goals}")

        return {
            "success": True,
            "data": {
                "interactionAnalysis": {
                    "interactionsAnalyzed": len(args.get("interactionData") or []),
                    "improvementAreas": [
                        "Increase question frequency",
                        "Improve feedback quality",
                        "Enhance active listening",
                    ],
                },
                "optimizationPlan": {
                    "optimizationGoals": goals,
                    "selectedInterventions": selected,
                    "constraints": args.get("constraints") or [],
                },
                "interventionPriority": {
                    "highPriority": selected[:1],
                    "mediumPriority": selected[1:2],
                    "lowPriority": selected[2:],
                },
                "implementationGuide": {
                    "implementationPhases": ["Planning", "Pilot", "Full implementation", "Evaluation"],
                    "timeline": "Phased implementation over 6-8 weeks",
                },
            },
        }

    def create_peer_assessment_systems(self, args: dict) -> dict:
        assessment_type = args.get("assessmentType")
        scope = args.get("assessmentScope") or []
        structure = args.get("feedbackStructure") or {}
        qa = args.get("qualityAssurance") or {}
        integrate = args.get("integrationWithLearning", True)

        self.logger.info(f"Designing {assessment_type} assessment across {len(scope)} areas")

        return {
            "success": True,
            "data": {
                "assessmentSystem": {
                    "assessmentType": assessment_type,
                    "assessmentScope": scope,
                    "feedbackStructure": structure,
                    "qualityAssurance": qa,
                    "integrationWithLearning": integrate,
                },
                "assessmentInstruments": [
                    {
                        "assessmentArea": area,
                        "instrument": f"{area} assessment tool",
                        "scoringRubric": f"{area} scoring criteria",
                    }
                    for area in scope
                ],
                "qualityControls": {
                    "qualityStandards": "Standards for assessment quality",
                    "calibration": "Assessor calibration process" if qa.get("calibrationTraining") else None,
                    "moderation": "Assessment moderation process" if qa.get("moderationNeeded") else None,
                },
                "integration": {
                    "integrationPlan": "How assessment integrates with learning objectives",
                    "feedbackLoop": "How assessment informs learning improvement",
                } if integrate else None,
            },
        }
